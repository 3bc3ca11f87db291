"""
Guardian listing, lookup and cascading deletion.

The hosted schema has no server-side cascade, so removing a guardian is
done here step by step: children are looked up first, then the guardian
row and photo go, then every child photo and row.  Each call waits for
the previous one.  The first failure stops the sequence and nothing that
already happened is rolled back.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..backend import Backend, BackendError
from ..entities import CHILD_TABLE, GUARDIAN_TABLE, Child, Guardian
from ..exceptions import CascadeDeleteError, MemberNotFound
from .photos import CHILD_PHOTO_FOLDER, GUARDIAN_PHOTO_FOLDER, delete_photo, is_stored_photo

logger = logging.getLogger(__name__)


def matches_search(guardian: Guardian, term: str) -> bool:
    term = (term or '').strip().lower()
    if not term:
        return True
    return term in guardian.nama.lower() or term in guardian.nik.lower()


def list_members(backend: Backend, search: str = '', admin_id: Any = None) -> List[Guardian]:
    """All guardians (optionally of one admin) whose name or NIK contains ``search``."""
    eq = {'admin_id': admin_id} if admin_id not in (None, '') else None
    rows = backend.select(GUARDIAN_TABLE, eq=eq)
    guardians = [Guardian.from_row(r) for r in rows]
    return [g for g in guardians if matches_search(g, search)]


def get_member(backend: Backend, guardian_id: Any) -> Guardian:
    rows = backend.select(GUARDIAN_TABLE, eq={'id': guardian_id})
    if not rows:
        raise MemberNotFound('Data anggota tidak ditemukan!')
    return Guardian.from_row(rows[0])


def _step(step: str, prefix: str, fn, *args):
    try:
        return fn(*args)
    except BackendError as exc:
        logger.error('cascade delete stopped at %s: %s', step, exc.message)
        raise CascadeDeleteError(f'{prefix}: {exc.message}', step=step) from exc


def delete_member(backend: Backend, guardian_id: Any, photo_url: Optional[str] = None) -> List[Child]:
    """Delete a guardian, its photo, and every child row and child photo.

    Returns the children that were removed.  Raises
    :class:`CascadeDeleteError` naming the step that failed.
    """
    rows = _step('fetch_children', 'Gagal mengambil data anak',
                 lambda: backend.select(CHILD_TABLE, eq={'id_orangtua': guardian_id}))
    children = [Child.from_row(r) for r in rows]

    _step('delete_guardian', 'Gagal menghapus data anggota',
          backend.delete, GUARDIAN_TABLE, guardian_id)

    if is_stored_photo(photo_url):
        _step('delete_guardian_photo', 'Gagal menghapus foto orang tua',
              delete_photo, backend, photo_url, GUARDIAN_PHOTO_FOLDER)

    for child in children:
        if is_stored_photo(child.foto):
            _step('delete_child_photo', 'Gagal menghapus foto anak',
                  delete_photo, backend, child.foto, CHILD_PHOTO_FOLDER)
        _step('delete_child', 'Gagal menghapus data anak',
              backend.delete, CHILD_TABLE, child.id)

    logger.info('deleted guardian %s with %d children', guardian_id, len(children))
    return children
