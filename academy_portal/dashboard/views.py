"""
GET /api/academy/dashboard/?location=&sport=&program=&gender=
"""
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from academies.mixins import AcademyScopedMixin
from academies.permissions import HasAcademy
from accounts.permissions import IsAdminOrAcademic

from .services import DashboardService

FILTER_PARAMS = ('location', 'sport', 'program', 'gender')


class DashboardView(AcademyScopedMixin, APIView):
    permission_classes = [IsAuthenticated, IsAdminOrAcademic, HasAcademy]

    def get(self, request):
        filters = {param: request.query_params.get(param, '').strip() for param in FILTER_PARAMS}
        return Response(DashboardService(request.academy, **filters).stats())
