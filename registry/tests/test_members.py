import pytest

from registry.exceptions import CascadeDeleteError
from registry.services.members import delete_member, list_members

from .conftest import CDN


def test_cascade_delete_removes_guardian_children_and_photos(backend, family):
    guardian, _ = family

    removed = delete_member(backend, 1, guardian['foto'])

    assert [c.id for c in removed] == [10, 11]
    assert backend.select('orangtua', eq={'id': 1}) == []
    assert backend.select('anak', eq={'id_orangtua': 1}) == []
    removed_paths = [c[1] for c in backend.calls_for('remove')]
    assert sorted(removed_paths) == ['profile-anak/kid1', 'profile-anak/kid2', 'profile-ortu/abc']
    assert backend.objects == {}


def test_cascade_delete_runs_steps_in_order(backend, family):
    delete_member(backend, 1, CDN + 'profile-ortu/abc')

    assert [(op, target) for op, target, _ in backend.calls] == [
        ('select', 'anak'),
        ('delete', 'orangtua'),
        ('remove', 'profile-ortu/abc'),
        ('remove', 'profile-anak/kid1'),
        ('delete', 'anak'),
        ('remove', 'profile-anak/kid2'),
        ('delete', 'anak'),
    ]


def test_guardian_without_photo_skips_photo_removal(backend):
    backend.seed('orangtua', {'id': 5, 'nama': 'Rudi', 'nik': '1', 'foto': None})
    backend.seed('anak', {'id': 50, 'nama': 'Tono', 'foto': None, 'id_orangtua': 5})

    delete_member(backend, 5, None)

    assert backend.calls_for('remove') == []
    assert backend.tables['anak'] == []


def test_failure_stops_without_rollback(backend, family):
    backend.fail_on.add(('remove', 'profile-anak/kid1'))

    with pytest.raises(CascadeDeleteError) as info:
        delete_member(backend, 1, CDN + 'profile-ortu/abc')

    assert info.value.step == 'delete_child_photo'
    assert info.value.message.startswith('Gagal menghapus foto anak')
    assert backend.calls[-1][:2] == ('remove', 'profile-anak/kid1')
    # guardian row and photo are already gone, children remain
    assert backend.select('orangtua', eq={'id': 1}) == []
    assert 'profile-ortu/abc' not in backend.objects
    assert len(backend.select('anak', eq={'id_orangtua': 1})) == 2


def test_guardian_delete_failure_is_reported(backend, family):
    backend.fail_on.add(('delete', 'orangtua'))

    with pytest.raises(CascadeDeleteError) as info:
        delete_member(backend, 1, CDN + 'profile-ortu/abc')

    assert info.value.message.startswith('Gagal menghapus data anggota')
    assert backend.calls_for('remove') == []


def test_list_filters_on_name_or_nik(backend):
    backend.seed(
        'orangtua',
        {'id': 1, 'nama': 'Siti Aminah', 'nik': '3201000000000001', 'admin_id': 'a'},
        {'id': 2, 'nama': 'Dewi Lestari', 'nik': '3201000000000777', 'admin_id': 'a'},
        {'id': 3, 'nama': 'Agus', 'nik': '3301000000000002', 'admin_id': 'b'},
    )

    assert [g.id for g in list_members(backend, 'siti')] == [1]
    assert [g.id for g in list_members(backend, '0777')] == [2]
    assert [g.id for g in list_members(backend, '')] == [1, 2, 3]
    assert [g.id for g in list_members(backend, '', admin_id='b')] == [3]


def test_members_endpoint(api, family):
    resp = api.get('/api/members', {'q': 'aminah'})

    assert resp.status_code == 200
    assert resp.data['ok'] is True
    assert resp.data['data'][0]['nama'] == 'Siti Aminah'
    assert resp.data['data'][0]['fotoPreview'] == CDN + 'profile-ortu/abc'


def test_members_endpoint_reports_fetch_failure(api, backend):
    backend.fail_on.add(('select', 'orangtua'))

    resp = api.get('/api/members')

    assert resp.status_code == 502
    assert resp.data['error']['message'] == 'Gagal mengambil data anggota!'


def test_delete_endpoint_uses_stored_photo(api, backend, family):
    resp = api.post('/api/members/1/delete', {}, format='json')

    assert resp.status_code == 200
    assert resp.data['deletedChildren'] == [10, 11]
    assert backend.objects == {}


def test_delete_endpoint_surfaces_step_error(api, backend, family):
    backend.fail_on.add(('delete', 'anak'))

    resp = api.post('/api/members/1/delete', {}, format='json')

    assert resp.status_code == 502
    assert resp.data['ok'] is False
    assert resp.data['error']['code'] == 'delete_failed'
    assert resp.data['error']['message'].startswith('Gagal menghapus data anak')


def test_delete_unknown_member_is_404(api, backend):
    resp = api.post('/api/members/99/delete', {}, format='json')

    assert resp.status_code == 404
    assert backend.mutations == []


def test_delete_endpoint_ignores_non_object_body(api, backend, family):
    resp = api.post('/api/members/1/delete', ['foto'], format='json')

    assert resp.status_code == 200
    assert 'profile-ortu/abc' not in backend.objects
