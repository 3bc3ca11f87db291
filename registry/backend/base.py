"""
Backend access capability.

Every registry service receives a :class:`Backend` explicitly instead of
reaching for a global client, so a test double can be substituted.  The
interface mirrors what the hosted service offers: filtered selects and
row mutations over named tables plus an object store with public URLs.
"""
from __future__ import annotations

import abc
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

Row = Dict[str, Any]


class BackendError(Exception):
    """Raised for any failed query, mutation or storage call."""

    def __init__(self, message: str, *, operation: str = '', target: str = ''):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.target = target


class Backend(abc.ABC):
    """Tabular query/mutation interface plus a binary object store."""

    #: Prefix of every public object URL, ending with ``/``.
    public_base_url: str = ''

    @abc.abstractmethod
    def select(
        self,
        table: str,
        columns: str = '*',
        *,
        eq: Optional[Mapping[str, Any]] = None,
        in_: Optional[Mapping[str, Iterable[Any]]] = None,
        order: Optional[str] = None,
        descending: bool = False,
    ) -> List[Row]:
        """Return rows of ``table`` matching every ``eq`` and ``in_`` filter."""

    @abc.abstractmethod
    def insert(self, table: str, values: Mapping[str, Any]) -> List[Row]:
        ...

    @abc.abstractmethod
    def update(self, table: str, row_id: Any, values: Mapping[str, Any]) -> List[Row]:
        ...

    @abc.abstractmethod
    def delete(self, table: str, row_id: Any) -> None:
        ...

    @abc.abstractmethod
    def upload(self, path: str, content: bytes, content_type: Optional[str] = None) -> None:
        ...

    @abc.abstractmethod
    def remove(self, paths: Sequence[str]) -> None:
        ...

    def public_url(self, path: str) -> str:
        return f"{self.public_base_url}{path}"
