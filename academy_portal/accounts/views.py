"""
Аутентификация.

- POST /api/auth/sign-in/        — вход (academic / user)
- POST /api/auth/admin-sign-in/  — вход в back-office, только admin
- POST /api/auth/sign-up/        — регистрация академии
- POST /api/auth/token/refresh/  — обновление access-токена
- GET|PATCH /api/auth/me/        — текущий пользователь
"""
import logging

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from academies.models import Academy
from academies.services import AcademyService
from core.exceptions import FieldAPIException, FieldValidationError

from .serializers import CustomTokenObtainPairSerializer, SignInSerializer, SignUpSerializer, UserSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


def issue_tokens(user):
    refresh = CustomTokenObtainPairSerializer.get_token(user)
    return {
        'access': str(refresh.access_token),
        'refresh': str(refresh),
        'user': UserSerializer(user).data,
    }


def authenticate_by_email(email, password):
    """Case-insensitive поиск пользователя и проверка пароля."""
    user = User.objects.filter(email__iexact=(email or '').strip()).first()
    if user is None or not user.is_active or not user.check_password(password):
        logger.warning('Sign-in failed for %s', email)
        raise FieldValidationError('Invalid email or password')
    return user


class SignInView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'login'

    def post(self, request):
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = authenticate_by_email(
            serializer.validated_data['email'],
            serializer.validated_data['password'],
        )

        if user.role == User.ROLE_ACADEMIC:
            academy = Academy.objects.filter(user=user).first()
            if academy is not None and academy.status != Academy.STATUS_ACCEPTED:
                # Фронтенд показывает отдельный экран для pending / rejected
                logger.info('Sign-in blocked for academy %s: %s', academy.pk, academy.status)
                raise FieldAPIException(academy.status, status_code=status.HTTP_403_FORBIDDEN)

        logger.info('User %s signed in', user.pk)
        return Response(issue_tokens(user))


class AdminSignInView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'login'

    def post(self, request):
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = authenticate_by_email(
            serializer.validated_data['email'],
            serializer.validated_data['password'],
        )
        if user.role != User.ROLE_ADMIN:
            logger.warning('Non-admin user %s tried admin sign-in', user.pk)
            raise FieldAPIException(
                'You are not authorized to perform this action',
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return Response(issue_tokens(user))


class SignUpView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'login'

    def post(self, request):
        serializer = SignUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        academy = AcademyService.register(
            name=data['name'],
            email=data['email'],
            password=data['password'],
            academy_name=data['academy_name'],
            phone_number=data.get('phone_number') or None,
        )
        return Response(
            {
                'user': UserSerializer(academy.user).data,
                'academy_id': academy.pk,
                'status': academy.status,
            },
            status=status.HTTP_201_CREATED,
        )


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)

    def patch(self, request):
        serializer = UserSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)
