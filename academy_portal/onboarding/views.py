"""
- GET  /api/academy/onboarding/           — прогресс по шагам
- POST /api/academy/onboarding/complete/  — завершить онбординг
"""
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from academies.mixins import AcademyScopedMixin
from academies.permissions import HasAcademy
from accounts.permissions import IsAdminOrAcademic

from .services import OnboardingService


class OnboardingView(AcademyScopedMixin, APIView):
    permission_classes = [IsAuthenticated, IsAdminOrAcademic, HasAcademy]

    def get(self, request):
        return Response(OnboardingService.status(request.academy))


class OnboardingCompleteView(AcademyScopedMixin, APIView):
    permission_classes = [IsAuthenticated, IsAdminOrAcademic, HasAcademy]

    def post(self, request):
        return Response(OnboardingService.complete(request.academy))
