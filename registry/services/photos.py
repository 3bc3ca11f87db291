"""
Profile photo storage helpers.

Photos are referenced by their public URL.  The storage path of an
object is its folder plus the last segment of that URL; the placeholder
avatar is never stored and therefore never deleted.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from django.conf import settings

from ..backend import Backend

logger = logging.getLogger(__name__)

GUARDIAN_PHOTO_FOLDER = 'profile-ortu'
CHILD_PHOTO_FOLDER = 'profile-anak'


def is_stored_photo(url: Optional[str]) -> bool:
    return bool(url) and url != settings.DEFAULT_AVATAR_URL


def storage_path(url: str, folder: str) -> str:
    return f"{folder}/{url.rstrip('/').split('/')[-1]}"


def photo_preview(url: Optional[str]) -> str:
    return url if url else settings.DEFAULT_AVATAR_URL


def upload_photo(backend: Backend, content: bytes, folder: str = GUARDIAN_PHOTO_FOLDER,
                 content_type: Optional[str] = None) -> str:
    """Store ``content`` under a fresh random name and return its public URL."""
    path = f'{folder}/{uuid.uuid4()}'
    backend.upload(path, content, content_type)
    logger.info('uploaded photo %s', path)
    return backend.public_url(path)


def delete_photo(backend: Backend, url: Optional[str], folder: str) -> Optional[str]:
    """Remove the object behind ``url``; return the removed path, if any."""
    if not is_stored_photo(url):
        return None
    path = storage_path(url, folder)
    backend.remove([path])
    logger.info('removed photo %s', path)
    return path
