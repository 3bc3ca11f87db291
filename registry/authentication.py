"""
Static token authentication for the admin API.

There are no local user accounts: the registry's people live in the
hosted backend.  Callers present the shared ``API_TOKEN`` with the
``Token`` keyword in the ``Authorization`` header.  When no token is
configured every request is treated as the service administrator, which
is only meant for local development.
"""
from __future__ import annotations

import hmac

from django.conf import settings
from rest_framework import authentication, exceptions


class ServiceAdmin:
    """Principal attached to ``request.user`` for accepted requests."""

    is_authenticated = True
    is_anonymous = False
    username = 'service-admin'

    def __str__(self) -> str:
        return self.username


class ServiceTokenAuthentication(authentication.BaseAuthentication):

    keyword = 'Token'

    def authenticate(self, request):
        expected = settings.API_TOKEN
        if not expected:
            return ServiceAdmin(), None
        auth = authentication.get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise exceptions.AuthenticationFailed('Invalid token header.')
        try:
            token = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Invalid token header.')
        if not hmac.compare_digest(token, expected):
            raise exceptions.AuthenticationFailed('Invalid token.')
        return ServiceAdmin(), token

    def authenticate_header(self, request):
        return self.keyword
