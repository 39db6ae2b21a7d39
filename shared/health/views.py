"""
Health check views.
"""
import logging

from django.core.cache import cache
from django.db import connection
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


@extend_schema(exclude=True)
class HealthCheckView(APIView):
    """Basic health check endpoint."""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({'status': 'healthy', 'service': 'surgical-kart-api'})


@extend_schema(exclude=True)
class ReadinessCheckView(APIView):
    """Readiness check: database and cache must both answer."""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        checks = {
            'database': self._run_check(self._ping_database),
            'cache': self._run_check(self._ping_cache),
        }
        ready = all(check['healthy'] for check in checks.values())
        return Response(
            {'status': 'ready' if ready else 'not_ready', 'checks': checks},
            status=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    @staticmethod
    def _run_check(check) -> dict:
        try:
            check()
            return {'healthy': True}
        except Exception as e:
            logger.warning(f"Readiness check {check.__name__} failed: {e}")
            return {'healthy': False, 'error': str(e)}

    @staticmethod
    def _ping_database():
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')

    @staticmethod
    def _ping_cache():
        cache.set('health_check', 'ok', 10)
        if cache.get('health_check') != 'ok':
            raise RuntimeError('Cache read/write failed')


@extend_schema(exclude=True)
class LivenessCheckView(APIView):
    """Liveness check - basic app responsiveness."""
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({'status': 'alive'})
