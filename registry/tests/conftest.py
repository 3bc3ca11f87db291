import pytest
from rest_framework.test import APIClient

from registry import backend as backend_module
from registry.backend import InMemoryBackend

CDN = 'https://cdn.test/storage/v1/object/public/images/'


@pytest.fixture
def backend(monkeypatch):
    """In-memory backend installed as the process-wide instance."""
    mem = InMemoryBackend(public_base_url=CDN)
    monkeypatch.setattr(backend_module, '_instance', mem)
    return mem


@pytest.fixture
def api(settings, backend):
    settings.API_TOKEN = ''
    return APIClient()


@pytest.fixture
def family(backend):
    """One guardian with a photo and two children, each with a photo."""
    guardian = backend.seed('orangtua', {
        'id': 1, 'nama': 'Siti Aminah', 'nik': '3201010101010001', 'alamat': 'Jl. Melati 1',
        'usia': 32, 'jenis_kelamin': 'Perempuan', 'nomor_telepon': '081234567890',
        'foto': CDN + 'profile-ortu/abc', 'admin_id': 'adm-1',
    })[0]
    children = backend.seed(
        'anak',
        {'id': 10, 'nama': 'Budi', 'foto': CDN + 'profile-anak/kid1', 'id_orangtua': 1, 'admin_id': 'adm-1'},
        {'id': 11, 'nama': 'Ani', 'foto': CDN + 'profile-anak/kid2', 'id_orangtua': 1, 'admin_id': 'adm-1'},
    )
    backend.objects.update({
        'profile-ortu/abc': b'p', 'profile-anak/kid1': b'k1', 'profile-anak/kid2': b'k2',
    })
    return guardian, children
