import math
import re

import bleach
from django.conf import settings
from rest_framework import serializers

from ..entities import SEX_CHOICES

DIGITS = re.compile(r'^[0-9]+$')


def _required(message):
    return {'required': message, 'blank': message, 'null': message}


class MemberUpdateSerializer(serializers.Serializer):
    nama = serializers.CharField(max_length=255, error_messages=_required('Nama harus diisi!'))
    nik = serializers.CharField(error_messages=_required('NIK harus diisi!'))
    alamat = serializers.CharField(error_messages=_required('Alamat harus diisi!'))
    usia = serializers.CharField(error_messages=_required('Usia harus diisi!'))
    jenis_kelamin = serializers.ChoiceField(
        choices=SEX_CHOICES,
        error_messages={**_required('Jenis kelamin harus dipilih!'),
                        'invalid_choice': 'Jenis kelamin harus dipilih!'},
    )
    nomor_telepon = serializers.CharField(error_messages=_required('Nomor telepon harus diisi!'))
    foto = serializers.FileField(required=False, allow_null=True)
    hapus_foto = serializers.BooleanField(required=False, default=False)

    def validate_nama(self, v):
        v = bleach.clean((v or '').strip(), tags=set(), strip=True)
        if not v:
            raise serializers.ValidationError('Nama harus diisi!')
        return v

    def validate_alamat(self, v):
        v = bleach.clean((v or '').strip(), tags=set(), strip=True)
        if not v:
            raise serializers.ValidationError('Alamat harus diisi!')
        return v

    def validate_nik(self, v):
        v = v.strip()
        if not DIGITS.match(v) or len(v) != 16:
            raise serializers.ValidationError('NIK harus berisi 16 angka!')
        return v

    def validate_usia(self, v):
        try:
            age = float(v)
        except (TypeError, ValueError):
            raise serializers.ValidationError('Usia harus berupa angka!')
        if not math.isfinite(age):
            raise serializers.ValidationError('Usia harus berupa angka!')
        if age <= 0:
            raise serializers.ValidationError('Usia harus lebih dari 0!')
        return int(age) if age.is_integer() else age

    def validate_nomor_telepon(self, v):
        v = v.strip()
        if not DIGITS.match(v):
            raise serializers.ValidationError('Nomor telepon harus berisi angka saja!')
        if len(v) <= 10:
            raise serializers.ValidationError('Nomor telepon harus lebih dari 10 angka!')
        return v

    def validate_foto(self, f):
        if f is not None and f.size > settings.PHOTO_MAX_BYTES:
            raise serializers.ValidationError('Ukuran gambar harus di bawah 1MB!')
        return f
