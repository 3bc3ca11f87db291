"""
Administrative dashboard endpoint.

Provides member/child totals, the recent immunization activity list and
the monthly average growth of the children in one administrative scope.
"""
from __future__ import annotations

from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status

from ..backend import get_backend
from ..services.dashboard import build_dashboard


@api_view(['GET'])
def admin_dashboard(request, admin_id):
    """Return dashboard metrics for one administrator.

    ``year`` selects the year of the growth chart; without it the first
    year found in the visit data is used.  When a backend read fails the
    response still has the dashboard shape, with ``ok`` false and the
    sections that could not be fetched left empty.
    """
    year = request.query_params.get('year')
    if year:
        try:
            year = int(year)
        except ValueError:
            year = 0
        if year <= 0:
            return Response({'ok': False, 'error': {'code': 'api_error', 'message': 'invalid year'}},
                            status=status.HTTP_400_BAD_REQUEST)
    else:
        year = None
    board = build_dashboard(get_backend(), admin_id, year)
    return Response(board.to_dict())
