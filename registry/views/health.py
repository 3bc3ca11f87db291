from django.http import JsonResponse

from ..backend import BackendError, get_backend
from ..entities import GUARDIAN_TABLE


def healthz(request):
    try:
        get_backend().select(GUARDIAN_TABLE, 'id', eq={'id': 0})
        return JsonResponse({'ok': True, 'backend': True})
    except BackendError as e:
        return JsonResponse({'ok': False, 'error': e.message}, status=503)
