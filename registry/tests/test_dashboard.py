from io import StringIO

import pytest
from django.core.management import call_command

from registry.services.dashboard import build_dashboard


@pytest.fixture
def scope(backend):
    backend.seed(
        'orangtua',
        {'id': 1, 'nama': 'Siti', 'admin_id': 'adm-1'},
        {'id': 2, 'nama': 'Dewi', 'admin_id': 'adm-1'},
        {'id': 3, 'nama': 'Other', 'admin_id': 'adm-2'},
    )
    backend.seed(
        'anak',
        {'id': 10, 'nama': 'Budi', 'id_orangtua': 1, 'admin_id': 'adm-1'},
        {'id': 11, 'nama': 'Ani', 'id_orangtua': 2, 'admin_id': 'adm-1'},
        {'id': 12, 'nama': 'Luar', 'id_orangtua': 3, 'admin_id': 'adm-2'},
    )
    backend.seed(
        'rekam_medis_posyandu',
        {'id': 100, 'id_anak': 10, 'tanggal_kunjungan': '2023-02-01', 'tinggi_badan': 70, 'berat_badan': 8,
         'aktivitas_imunisasi': 'Campak', 'status_imunisasi': 'Selesai', 'dibuat_pada': '2023-02-01T09:00:00'},
        {'id': 101, 'id_anak': 11, 'tanggal_kunjungan': '2024-02-10', 'tinggi_badan': 80, 'berat_badan': 10,
         'aktivitas_imunisasi': None, 'status_imunisasi': None, 'dibuat_pada': '2024-02-10T09:00:00'},
        {'id': 102, 'id_anak': 10, 'tanggal_kunjungan': '2024-02-20', 'tinggi_badan': 90, 'berat_badan': 12,
         'aktivitas_imunisasi': 'Polio', 'status_imunisasi': 'Belum', 'dibuat_pada': '2024-02-20T09:00:00'},
        {'id': 103, 'id_anak': 12, 'tanggal_kunjungan': '2024-02-20', 'tinggi_badan': 500, 'berat_badan': 500,
         'aktivitas_imunisasi': 'x', 'status_imunisasi': 'y', 'dibuat_pada': '2024-02-21T09:00:00'},
    )
    return backend


def test_summary_counts_and_activity_history(scope):
    board = build_dashboard(scope, 'adm-1', 2024)

    assert board.error is None
    assert (board.total_members, board.total_children) == (2, 2)
    assert [a['date'] for a in board.activities] == [
        '2024-02-20T09:00:00', '2024-02-10T09:00:00', '2023-02-01T09:00:00',
    ]
    assert board.activities[0] == {
        'name': 'Budi', 'aktivitas': 'Polio', 'status': 'Belum', 'date': '2024-02-20T09:00:00',
    }
    assert board.activities[1]['aktivitas'] == 'Tidak ada aktivitas'
    assert board.activities[1]['status'] == 'Tidak ada status'


def test_growth_for_selected_year_only_uses_scope(scope):
    board = build_dashboard(scope, 'adm-1', 2023)

    assert board.selected_year == 2023
    assert [p.to_dict() for p in board.growth] == [
        {'month': '02', 'tinggi_badan': 70.0, 'berat_badan': 8.0},
    ]

    board = build_dashboard(scope, 'adm-1', 2024)
    assert board.growth[0].mean_height == pytest.approx(85)
    assert board.growth[0].mean_weight == pytest.approx(11)


def test_default_year_is_first_encountered(scope):
    board = build_dashboard(scope, 'adm-1')

    assert board.years == [2023, 2024]
    assert board.selected_year == 2023


def test_fetch_failure_keeps_earlier_sections(scope):
    scope.fail_on.add(('select', 'rekam_medis_posyandu'))

    board = build_dashboard(scope, 'adm-1', 2024)

    assert board.error
    assert board.total_members == 2
    assert board.activities == [] and board.growth == [] and board.years == []


def test_dashboard_endpoint(api, scope):
    resp = api.get('/api/admin/adm-1/dashboard', {'year': 2024})

    assert resp.status_code == 200
    assert resp.data['ok'] is True
    assert resp.data['summary'] == {'totalMembers': 2, 'totalChildren': 2}
    assert resp.data['selectedYear'] == 2024
    assert resp.data['chart']['labels'] == ['Februari']
    assert resp.data['averageGrowth'][0]['month'] == '02'


def test_dashboard_endpoint_on_backend_failure(api, scope):
    scope.fail_on.add(('select', 'orangtua'))

    resp = api.get('/api/admin/adm-1/dashboard')

    assert resp.status_code == 200
    assert resp.data['ok'] is False
    assert resp.data['summary'] == {'totalMembers': None, 'totalChildren': None}
    assert resp.data['averageGrowth'] == []


def test_dashboard_rejects_bad_year(api, scope):
    assert api.get('/api/admin/adm-1/dashboard', {'year': 'abc'}).status_code == 400


def test_growth_report_command(scope):
    out = StringIO()
    call_command('growth_report', 'adm-1', '--year', '2024', stdout=out)

    out = out.getvalue()
    assert 'Anggota: 2  Anak: 2' in out
    assert 'Februari' in out
    assert '85.00' in out


def test_dashboard_rejects_non_positive_year(api, scope):
    for value in ('0', '-2024'):
        resp = api.get('/api/admin/adm-1/dashboard', {'year': value})
        assert resp.status_code == 400
        assert resp.data['ok'] is False


def test_explicit_year_without_data_is_kept(scope):
    board = build_dashboard(scope, 'adm-1', 2019)

    assert board.selected_year == 2019
    assert board.growth == []
    assert board.years == [2023, 2024]
