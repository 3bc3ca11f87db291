"""
Monthly growth aggregation for the admin dashboard.

Visit records are reduced to one point per calendar month of a selected
year holding the mean height and mean weight of that month's visits.
"""
from __future__ import annotations

import datetime
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from django.utils.dateparse import parse_date, parse_datetime

MONTH_NAMES = (
    'Januari', 'Februari', 'Maret', 'April', 'Mei', 'Juni',
    'Juli', 'Agustus', 'September', 'Oktober', 'November', 'Desember',
)

HEIGHT_LABEL = 'Rata-rata Tinggi Badan (cm)'
WEIGHT_LABEL = 'Rata-rata Berat Badan (kg)'


@dataclass
class MonthlyGrowth:
    month: str
    mean_height: Optional[float]
    mean_weight: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'month': self.month,
            'tinggi_badan': self.mean_height,
            'berat_badan': self.mean_weight,
        }


def visit_date(row: Dict[str, Any]) -> Optional[datetime.date]:
    """Return the visit date of a row, or None when it cannot be read."""
    value = row.get('tanggal_kunjungan')
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not value:
        return None
    text = str(value)
    try:
        parsed = parse_datetime(text)
        if parsed:
            return parsed.date()
        return parse_date(text[:10])
    except ValueError:
        return None


def available_years(rows: Iterable[Dict[str, Any]]) -> List[int]:
    """Distinct visit years, in the order they are first encountered."""
    years: Dict[int, None] = {}
    for row in rows:
        d = visit_date(row)
        if d is not None:
            years.setdefault(d.year, None)
    return list(years)


def default_year(years: List[int], fallback: int) -> int:
    return years[0] if years else fallback


def _number(value: Any) -> Optional[float]:
    if value is None or value == '':
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def monthly_growth(rows: Iterable[Dict[str, Any]], year: int,
                   missing_as_zero: bool = True) -> List[MonthlyGrowth]:
    """Average ``tinggi_badan`` and ``berat_badan`` per month of ``year``.

    Only months with at least one visit appear, ordered ascending.  With
    ``missing_as_zero`` a missing measurement is summed as 0 and still
    counts towards the divisor; otherwise it is left out of that field's
    average, and a field with no values in a month averages to None.
    """
    sums: Dict[str, Dict[str, float]] = {}
    for row in rows:
        d = visit_date(row)
        if d is None or d.year != year:
            continue
        acc = sums.setdefault(f'{d.month:02d}', {'h': 0.0, 'hn': 0, 'w': 0.0, 'wn': 0})
        for value, total, count in ((row.get('tinggi_badan'), 'h', 'hn'),
                                    (row.get('berat_badan'), 'w', 'wn')):
            number = _number(value)
            if number is None:
                if not missing_as_zero:
                    continue
                number = 0.0
            acc[total] += number
            acc[count] += 1

    points = []
    for month in sorted(sums):
        acc = sums[month]
        points.append(MonthlyGrowth(
            month=month,
            mean_height=acc['h'] / acc['hn'] if acc['hn'] else None,
            mean_weight=acc['w'] / acc['wn'] if acc['wn'] else None,
        ))
    return points


def month_label(month: str) -> str:
    return MONTH_NAMES[int(month) - 1]


def chart_series(points: List[MonthlyGrowth]) -> Dict[str, Any]:
    """Labels and datasets ready for a two-line chart."""
    return {
        'labels': [month_label(p.month) for p in points],
        'datasets': [
            {'label': HEIGHT_LABEL, 'data': [p.mean_height for p in points]},
            {'label': WEIGHT_LABEL, 'data': [p.mean_weight for p in points]},
        ],
    }
