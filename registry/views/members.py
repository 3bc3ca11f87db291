"""
Guardian (member) management endpoints.

These views list and search guardians, show a single guardian for the
edit form, persist edits including photo replacement, and delete a
guardian together with its children and stored photos.
"""
from __future__ import annotations

import logging

from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status

from ..backend import BackendError, get_backend
from ..exceptions import CascadeDeleteError, error_response
from ..serializers.member import MemberUpdateSerializer
from ..services.member_edit import update_member
from ..services.members import delete_member, get_member, list_members
from ..services.photos import photo_preview

logger = logging.getLogger(__name__)


def _member_payload(guardian) -> dict:
    data = guardian.to_dict()
    data['fotoPreview'] = photo_preview(guardian.foto)
    return data


@api_view(['GET'])
def members(request):
    """List guardians, filtered by ``q`` on name or NIK and optionally ``adminId``."""
    search = request.query_params.get('q', '')
    admin_id = request.query_params.get('adminId')
    try:
        guardians = list_members(get_backend(), search, admin_id)
    except BackendError as exc:
        logger.error('Error fetching members: %s', exc.message)
        return error_response('backend_error', 'Gagal mengambil data anggota!', status.HTTP_502_BAD_GATEWAY)
    return Response({'ok': True, 'data': [_member_payload(g) for g in guardians]})


@api_view(['GET'])
def member_detail(request, member_id):
    """Return one guardian with the preview URL the edit form shows."""
    try:
        guardian = get_member(get_backend(), member_id)
    except BackendError as exc:
        logger.error('Error fetching member %s: %s', member_id, exc.message)
        return error_response('backend_error', 'Gagal mengambil data anggota!', status.HTTP_502_BAD_GATEWAY)
    return Response({'ok': True, 'data': _member_payload(guardian)})


@api_view(['POST'])
def member_update(request, member_id):
    """Validate and persist an edit of a guardian.

    Accepts the guardian fields plus an optional ``foto`` file and a
    ``hapus_foto`` flag.  Nothing reaches the backend unless every
    field is valid.
    """
    serializer = MemberUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    try:
        guardian = update_member(get_backend(), member_id, serializer.validated_data)
    except BackendError as exc:
        logger.error('Error updating member %s: %s', member_id, exc.message)
        return error_response('backend_error', 'Gagal memperbarui data!', status.HTTP_502_BAD_GATEWAY)
    return Response({'ok': True, 'message': 'Data berhasil diperbarui!', 'data': _member_payload(guardian)})


@api_view(['POST'])
def member_delete(request, member_id):
    """Delete a guardian, its children and every associated photo.

    The guardian photo URL is taken from ``foto`` in the body when given,
    otherwise from the stored row.
    """
    backend = get_backend()
    photo_url = request.data.get('foto') if isinstance(request.data, dict) else None
    try:
        if photo_url is None:
            photo_url = get_member(backend, member_id).foto
        children = delete_member(backend, member_id, photo_url)
    except CascadeDeleteError as exc:
        return error_response(exc.code, exc.message, status.HTTP_502_BAD_GATEWAY)
    except BackendError as exc:
        logger.error('Error fetching member %s: %s', member_id, exc.message)
        return error_response('backend_error', 'Gagal mengambil data anggota!', status.HTTP_502_BAD_GATEWAY)
    return Response({
        'ok': True,
        'message': 'Data anggota berhasil dihapus!',
        'deletedChildren': [c.id for c in children],
    })
