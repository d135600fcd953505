"""Core endpoints: database health probe and the JWT auth flow.

The token endpoints are SimpleJWT's views; login swaps in a serializer that
adds the role claim and the user payload, and writes an audit entry.
"""

import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.views import TokenObtainPairView

from clinicqueue.core.serializers import QueueUserSerializer, RoleTokenObtainPairSerializer
from clinicqueue.core.utils import log_queue_action

logger = logging.getLogger(__name__)


def health(request):
    """GET /api/health/ - no auth; 503 when the database does not answer."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError as exc:
        logger.error('health: database unreachable (%s)', exc)
        return JsonResponse({'status': 'error', 'database': 'unreachable'}, status=503)

    return JsonResponse({'status': 'ok', 'database': 'ok'})


class LoginView(TokenObtainPairView):
    """POST /api/auth/login/  Body: {"username": "...", "password": "..."}"""

    serializer_class = RoleTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except TokenError as e:
            raise InvalidToken(e.args[0])

        log_queue_action(serializer.user, 'auth_login')
        return Response(serializer.validated_data, status=status.HTTP_200_OK)


class MeView(generics.RetrieveAPIView):
    """GET /api/auth/me/ - the logged-in user with role and queue rights."""

    permission_classes = [IsAuthenticated]
    serializer_class = QueueUserSerializer

    def get_object(self):
        return self.request.user
