"""Supabase implementation of the backend capability."""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from django.conf import settings
from supabase import Client, create_client

from .base import Backend, BackendError, Row

logger = logging.getLogger(__name__)


class SupabaseBackend(Backend):
    """Talk to a Supabase project: PostgREST tables and one storage bucket."""

    def __init__(self, url: Optional[str] = None, key: Optional[str] = None,
                 bucket: Optional[str] = None, client: Optional[Client] = None):
        url = url if url is not None else settings.SUPABASE_URL
        key = key if key is not None else settings.SUPABASE_KEY
        self.bucket = bucket or settings.SUPABASE_BUCKET
        if client is None:
            if not url or not key:
                raise BackendError('Supabase is not configured (SUPABASE_URL/SUPABASE_KEY)')
            client = create_client(url, key)
        self.client = client
        self.public_base_url = f"{url.rstrip('/')}/storage/v1/object/public/{self.bucket}/"

    def _execute(self, query, operation: str, target: str):
        try:
            return query.execute()
        except Exception as exc:
            # postgrest/httpx raise their own types; callers only see BackendError
            logger.debug('supabase %s on %s failed', operation, target, exc_info=True)
            raise BackendError(getattr(exc, 'message', None) or str(exc),
                               operation=operation, target=target) from exc

    def select(self, table: str, columns: str = '*', *, eq: Optional[Mapping[str, Any]] = None,
               in_: Optional[Mapping[str, Iterable[Any]]] = None, order: Optional[str] = None,
               descending: bool = False) -> List[Row]:
        query = self.client.table(table).select(columns)
        for column, value in (eq or {}).items():
            query = query.eq(column, value)
        for column, values in (in_ or {}).items():
            query = query.in_(column, list(values))
        if order:
            query = query.order(order, desc=descending)
        resp = self._execute(query, 'select', table)
        return list(resp.data or [])

    def insert(self, table: str, values: Mapping[str, Any]) -> List[Row]:
        resp = self._execute(self.client.table(table).insert(dict(values)), 'insert', table)
        return list(resp.data or [])

    def update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> List[Row]:
        query = self.client.table(table).update(dict(values)).eq('id', row_id)
        resp = self._execute(query, 'update', table)
        return list(resp.data or [])

    def delete(self, table: str, row_id: Any) -> None:
        self._execute(self.client.table(table).delete().eq('id', row_id), 'delete', table)

    def upload(self, path: str, content: bytes, content_type: Optional[str] = None) -> None:
        options = {'content-type': content_type} if content_type else None
        try:
            self.client.storage.from_(self.bucket).upload(path, content, options)
        except Exception as exc:
            raise BackendError(getattr(exc, 'message', None) or str(exc),
                               operation='upload', target=path) from exc

    def remove(self, paths: Sequence[str]) -> None:
        try:
            self.client.storage.from_(self.bucket).remove(list(paths))
        except Exception as exc:
            raise BackendError(getattr(exc, 'message', None) or str(exc),
                               operation='remove', target=','.join(paths)) from exc
