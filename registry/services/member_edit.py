"""
Guardian update with optional photo replacement.

Input is already validated.  The photo is settled before the row is
written: a new file is uploaded first and only then is the superseded
object removed; an explicit removal deletes the stored object and
persists null.  When the final row update fails, a photo uploaded by the
same call stays in storage.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..backend import Backend, BackendError
from ..entities import GUARDIAN_TABLE, Guardian
from ..exceptions import MemberUpdateError, PhotoUploadError
from .members import get_member
from .photos import GUARDIAN_PHOTO_FOLDER, delete_photo, upload_photo

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('nama', 'nik', 'alamat', 'usia', 'jenis_kelamin', 'nomor_telepon')


def _discard_old_photo(backend: Backend, url: Optional[str]) -> None:
    try:
        delete_photo(backend, url, GUARDIAN_PHOTO_FOLDER)
    except BackendError as exc:
        logger.warning('could not delete old photo %s: %s', url, exc.message)


def resolve_photo(backend: Backend, old_url: Optional[str], new_file=None,
                  remove: bool = False) -> Optional[str]:
    """Return the photo reference to persist, touching storage as needed."""
    if new_file is not None:
        content = new_file.read()
        try:
            new_url = upload_photo(backend, content, GUARDIAN_PHOTO_FOLDER,
                                   getattr(new_file, 'content_type', None))
        except BackendError as exc:
            logger.error('photo upload failed: %s', exc.message)
            raise PhotoUploadError('Gagal mengupload gambar!') from exc
        _discard_old_photo(backend, old_url)
        return new_url
    if remove:
        _discard_old_photo(backend, old_url)
        return None
    return old_url


def update_member(backend: Backend, guardian_id: Any, data: Dict[str, Any]) -> Guardian:
    """Persist validated form ``data`` for a guardian and return the new state.

    ``data`` may carry ``foto`` (an uploaded file) and ``hapus_foto``.
    """
    current = get_member(backend, guardian_id)
    photo_url = resolve_photo(backend, current.foto, data.get('foto'), bool(data.get('hapus_foto')))

    values = {name: data[name] for name in EDITABLE_FIELDS}
    values['foto'] = photo_url
    try:
        rows = backend.update(GUARDIAN_TABLE, guardian_id, values)
    except BackendError as exc:
        logger.error('updating guardian %s failed: %s', guardian_id, exc.message)
        raise MemberUpdateError('Gagal memperbarui data!') from exc

    logger.info('updated guardian %s', guardian_id)
    if rows:
        return Guardian.from_row(rows[0])
    return Guardian.from_row({**current.to_dict(), **values})
