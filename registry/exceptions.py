"""
Error types of the registry app and the unified API exception handler.
"""
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

from .backend import BackendError


class RegistryError(Exception):
    """Base class for registry failures that carry a user-facing message."""

    code = 'registry_error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MemberNotFound(RegistryError):
    code = 'not_found'


class CascadeDeleteError(RegistryError):
    """A step of the guardian deletion failed; earlier steps stay applied."""

    code = 'delete_failed'

    def __init__(self, message: str, step: str):
        super().__init__(message)
        self.step = step


class PhotoUploadError(RegistryError):
    code = 'upload_failed'


class MemberUpdateError(RegistryError):
    code = 'update_failed'


def error_response(code: str, message, status: int) -> Response:
    return Response({'ok': False, 'error': {'code': code, 'message': message}}, status=status)


def api_exception_handler(exc, context):
    if isinstance(exc, MemberNotFound):
        return error_response(exc.code, exc.message, 404)
    if isinstance(exc, RegistryError):
        return error_response(exc.code, exc.message, 502)
    if isinstance(exc, BackendError):
        return error_response('backend_error', exc.message, 502)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        return error_response('server_error', str(exc), 500)
    # normalize response
    detail = None
    code = 'api_error'
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
        if 'detail' not in resp.data:
            code = 'validation_error'
    else:
        detail = resp.data
    return error_response(code, detail, resp.status_code)
