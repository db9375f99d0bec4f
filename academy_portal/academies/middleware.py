"""
Academy Middleware — определяет академию, с которой работает запрос.

Логика:
  1. admin + cookie impersonatedAcademyId (или заголовок
     X-Impersonated-Academy-Id)  → академия с этим id
  2. academic                    → академия, которой владеет пользователь
  3. остальные                   → None

JWT-аутентификация DRF происходит уже внутри view, поэтому middleware только
читает id имперсонации и гарантирует очистку context; сама академия
подставляется в AcademyScopedMixin.perform_authentication() через
attach_academy().
"""

import logging

from django.conf import settings as django_settings

from academy_portal.sentry_config import set_user_context

from .context import clear_current_academy, set_current_academy

logger = logging.getLogger(__name__)


def read_impersonated_id(request):
    raw = request.COOKIES.get(django_settings.ACADEMY_IMPERSONATION_COOKIE)
    if not raw:
        raw = request.META.get(django_settings.ACADEMY_IMPERSONATION_HEADER, '')
    raw = (raw or '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning('Ignoring malformed impersonation id "%s"', raw)
        return None


def resolve_academy(user, impersonated_id=None):
    """Академия для пользователя с учётом имперсонации администратором."""
    from .models import Academy

    if user is None or not user.is_authenticated:
        return None

    if user.is_platform_admin:
        if impersonated_id is None:
            return None
        return Academy.objects.filter(pk=impersonated_id).first()

    if user.is_academic:
        return Academy.objects.filter(user=user).first()

    return None


def attach_academy(request):
    """Ставит request.academy и context по уже аутентифицированному пользователю."""
    impersonated_id = getattr(request, 'impersonated_academy_id', None)
    if impersonated_id is None:
        impersonated_id = read_impersonated_id(request)
    academy = resolve_academy(request.user, impersonated_id)
    request.academy = academy
    django_request = getattr(request, '_request', None)
    if django_request is not None:
        django_request.academy = academy
    set_current_academy(academy)
    return academy


class AcademyMiddleware:
    """
    Ставить в MIDDLEWARE ПОСЛЕ AuthenticationMiddleware.

    Ставит:
      - request.impersonated_academy_id = int | None
      - request.academy = Academy | None (для сессионной аутентификации)
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.impersonated_academy_id = read_impersonated_id(request)
        user = getattr(request, 'user', None)
        request.academy = resolve_academy(user, request.impersonated_academy_id)
        set_current_academy(request.academy)
        if user is not None:
            set_user_context(user)

        try:
            response = self.get_response(request)
        finally:
            clear_current_academy()

        return response
