"""
Data behind the admin dashboard: member/child totals, recent activity
and the monthly growth chart for one administrative scope.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.utils import timezone

from ..backend import Backend, BackendError
from ..entities import CHILD_TABLE, GUARDIAN_TABLE, VISIT_TABLE, VisitRecord
from . import growth

logger = logging.getLogger(__name__)

NO_ACTIVITY = 'Tidak ada aktivitas'
NO_STATUS = 'Tidak ada status'


@dataclass
class Dashboard:
    total_members: Optional[int] = None
    total_children: Optional[int] = None
    activities: List[Dict[str, Any]] = field(default_factory=list)
    years: List[int] = field(default_factory=list)
    selected_year: Optional[int] = None
    growth: List[growth.MonthlyGrowth] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ok': self.error is None,
            'error': self.error,
            'summary': {
                'totalMembers': self.total_members,
                'totalChildren': self.total_children,
            },
            'activities': self.activities,
            'years': self.years,
            'selectedYear': self.selected_year,
            'averageGrowth': [p.to_dict() for p in self.growth],
            'chart': growth.chart_series(self.growth),
        }


def activity_history(visits: List[Dict[str, Any]], children: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    names = {c.get('id'): c.get('nama') for c in children}
    history = []
    for row in visits:
        visit = VisitRecord.from_row(row)
        history.append({
            'name': names.get(visit.id_anak),
            'aktivitas': visit.aktivitas_imunisasi or NO_ACTIVITY,
            'status': visit.status_imunisasi or NO_STATUS,
            'date': visit.dibuat_pada,
        })
    return history


def build_dashboard(backend: Backend, admin_id: Any, year: Optional[int] = None,
                    missing_as_zero: Optional[bool] = None) -> Dashboard:
    """Fetch and aggregate everything the dashboard shows.

    A failed fetch is logged and ends the build; whatever was computed
    before it is kept and :attr:`Dashboard.error` is set.
    """
    if missing_as_zero is None:
        missing_as_zero = settings.GROWTH_MISSING_AS_ZERO
    board = Dashboard(selected_year=year if year is not None else timezone.localdate().year)

    try:
        members = backend.select(GUARDIAN_TABLE, eq={'admin_id': admin_id})
        children = backend.select(CHILD_TABLE, eq={'admin_id': admin_id})
    except BackendError as exc:
        logger.error('Error fetching summary data for admin %s: %s', admin_id, exc.message)
        board.error = exc.message
        return board
    board.total_members = len(members)
    board.total_children = len(children)
    child_ids = [c.get('id') for c in children]

    try:
        visits = backend.select(
            VISIT_TABLE, 'id, id_anak, aktivitas_imunisasi, status_imunisasi, dibuat_pada',
            in_={'id_anak': child_ids}, order='dibuat_pada', descending=True,
        )
    except BackendError as exc:
        logger.error('Error fetching activity history for admin %s: %s', admin_id, exc.message)
        board.error = exc.message
        return board
    board.activities = activity_history(visits, children)

    try:
        rows = backend.select(VISIT_TABLE, 'tanggal_kunjungan, tinggi_badan, berat_badan',
                              in_={'id_anak': child_ids})
    except BackendError as exc:
        logger.error('Error fetching average growth data for admin %s: %s', admin_id, exc.message)
        board.error = exc.message
        return board

    board.years = growth.available_years(rows)
    if year is None:
        board.selected_year = growth.default_year(board.years, board.selected_year)
    board.growth = growth.monthly_growth(rows, board.selected_year, missing_as_zero)
    return board
