"""
In-process backend for local development and tests.

Tables are plain lists of dicts and stored objects are bytes keyed by
path.  Every call is appended to :attr:`InMemoryBackend.calls` as
``(operation, target, detail)`` so tests can assert the exact sequence
of backend traffic, and :attr:`fail_on` makes chosen calls raise.
"""
from __future__ import annotations

import copy
import itertools
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from .base import Backend, BackendError, Row


class InMemoryBackend(Backend):

    def __init__(self, public_base_url: str = 'https://storage.test/images/'):
        self.public_base_url = public_base_url
        self.tables: Dict[str, List[Row]] = {}
        self.objects: Dict[str, bytes] = {}
        self.calls: List[Tuple[str, str, Any]] = []
        # (operation, target) pairs; target '*' matches every target
        self.fail_on: Set[Tuple[str, str]] = set()
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _record(self, operation: str, target: str, detail: Any = None) -> None:
        self.calls.append((operation, target, detail))
        if (operation, target) in self.fail_on or (operation, '*') in self.fail_on:
            raise BackendError(f'{operation} {target} failed', operation=operation, target=target)

    def calls_for(self, operation: str) -> List[Tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] == operation]

    @property
    def mutations(self) -> List[Tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] != 'select']

    def seed(self, table: str, *rows: Mapping[str, Any]) -> List[Row]:
        """Store rows without recording a call."""
        stored = []
        for row in rows:
            row = dict(row)
            row.setdefault('id', next(self._ids))
            self.tables.setdefault(table, []).append(row)
            stored.append(copy.deepcopy(row))
        return stored

    # ------------------------------------------------------------------
    # Backend interface
    # ------------------------------------------------------------------
    def select(self, table: str, columns: str = '*', *, eq: Optional[Mapping[str, Any]] = None,
               in_: Optional[Mapping[str, Iterable[Any]]] = None, order: Optional[str] = None,
               descending: bool = False) -> List[Row]:
        in_ = {k: list(v) for k, v in (in_ or {}).items()}
        self._record('select', table, {'eq': dict(eq or {}), 'in': in_})
        rows = [
            r for r in self.tables.get(table, [])
            if all(r.get(k) == v for k, v in (eq or {}).items())
            and all(r.get(k) in v for k, v in in_.items())
        ]
        if order:
            rows.sort(key=lambda r: (r.get(order) is None, r.get(order)), reverse=descending)
        if columns.strip() != '*':
            wanted = [c.strip() for c in columns.split(',')]
            rows = [{c: r.get(c) for c in wanted} for r in rows]
        return copy.deepcopy(rows)

    def insert(self, table: str, values: Mapping[str, Any]) -> List[Row]:
        self._record('insert', table, dict(values))
        return self.seed(table, values)

    def update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> List[Row]:
        self._record('update', table, {'id': row_id, 'values': dict(values)})
        updated = []
        for row in self.tables.get(table, []):
            if row.get('id') == row_id:
                row.update(values)
                updated.append(copy.deepcopy(row))
        return updated

    def delete(self, table: str, row_id: Any) -> None:
        self._record('delete', table, {'id': row_id})
        self.tables[table] = [r for r in self.tables.get(table, []) if r.get('id') != row_id]

    def upload(self, path: str, content: bytes, content_type: Optional[str] = None) -> None:
        self._record('upload', path, content_type)
        if path in self.objects:
            raise BackendError('The resource already exists', operation='upload', target=path)
        self.objects[path] = bytes(content)

    def remove(self, paths: Sequence[str]) -> None:
        for path in paths:
            self._record('remove', path)
            self.objects.pop(path, None)
