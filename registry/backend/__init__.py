"""
Backend access for the registry app.

Services take a :class:`Backend` argument; only the views call
:func:`get_backend`, which builds the implementation named by the
``REGISTRY_BACKEND`` setting once per process.
"""
from __future__ import annotations

from typing import Optional

from django.conf import settings
from django.utils.module_loading import import_string

from .base import Backend, BackendError, Row
from .memory import InMemoryBackend

_instance: Optional[Backend] = None


def get_backend() -> Backend:
    global _instance
    if _instance is None:
        backend_cls = import_string(settings.REGISTRY_BACKEND)
        _instance = backend_cls()
    return _instance


def reset_backend() -> None:
    """Forget the cached instance (settings changed, tests)."""
    global _instance
    _instance = None


__all__ = ['Backend', 'BackendError', 'InMemoryBackend', 'Row', 'get_backend', 'reset_backend']
