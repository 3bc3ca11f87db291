"""
Typed views of the rows stored in the hosted backend.

Column names are the backend's own (Indonesian) names; the dataclasses
only give the services attribute access and a single place where the
table names are spelled out.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

GUARDIAN_TABLE = 'orangtua'
CHILD_TABLE = 'anak'
VISIT_TABLE = 'rekam_medis_posyandu'

SEX_CHOICES = ('Laki-laki', 'Perempuan')


@dataclass
class Guardian:
    id: Any
    nama: str = ''
    nik: str = ''
    alamat: str = ''
    usia: Any = None
    jenis_kelamin: str = ''
    nomor_telepon: str = ''
    foto: Optional[str] = None
    admin_id: Any = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Guardian':
        return cls(
            id=row.get('id'),
            nama=row.get('nama') or '',
            nik=str(row.get('nik') or ''),
            alamat=row.get('alamat') or '',
            usia=row.get('usia'),
            jenis_kelamin=row.get('jenis_kelamin') or '',
            nomor_telepon=str(row.get('nomor_telepon') or ''),
            foto=row.get('foto') or None,
            admin_id=row.get('admin_id'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'nama': self.nama,
            'nik': self.nik,
            'alamat': self.alamat,
            'usia': self.usia,
            'jenis_kelamin': self.jenis_kelamin,
            'nomor_telepon': self.nomor_telepon,
            'foto': self.foto,
            'admin_id': self.admin_id,
        }


@dataclass
class Child:
    id: Any
    nama: str = ''
    foto: Optional[str] = None
    id_orangtua: Any = None
    admin_id: Any = None
    # remaining identity columns, passed through untouched
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Child':
        known = {'id', 'nama', 'foto', 'id_orangtua', 'admin_id'}
        return cls(
            id=row.get('id'),
            nama=row.get('nama') or '',
            foto=row.get('foto') or None,
            id_orangtua=row.get('id_orangtua'),
            admin_id=row.get('admin_id'),
            extra={k: v for k, v in row.items() if k not in known},
        )


@dataclass
class VisitRecord:
    id: Any
    id_anak: Any = None
    tanggal_kunjungan: Any = None
    tinggi_badan: Any = None
    berat_badan: Any = None
    aktivitas_imunisasi: Optional[str] = None
    status_imunisasi: Optional[str] = None
    dibuat_pada: Any = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'VisitRecord':
        return cls(**{k: row.get(k) for k in cls.__dataclass_fields__})
