"""
URL configuration для academy_portal.

- /api/auth/      — вход, регистрация академии, профиль
- /api/admin/     — back-office администратора платформы
- /api/academy/   — портал академии (academic или admin с имперсонацией)
- /api/catalog/   — справочники для форм
- /api/uploads/   — загрузка изображений
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

from .health import health_check, ready_check

admin_api = [
    path('', include('academies.admin_urls')),
    path('', include('geo.admin_urls')),
    path('', include('catalog.admin_urls')),
    path('', include('promotions.admin_urls')),
    path('', include('programs.admin_urls')),
    path('', include('bookings.admin_urls')),
]

academy_api = [
    path('', include('academies.urls')),
    path('', include('programs.urls')),
    path('', include('promotions.urls')),
    path('', include('bookings.urls')),
    path('', include('notifications.urls')),
    path('dashboard/', include('dashboard.urls')),
    path('onboarding/', include('onboarding.urls')),
]

urlpatterns = [
    path('admin/', admin.site.urls),  # Django admin для управления БД

    # Health checks для мониторинга
    path('api/health/', health_check, name='health'),
    path('api/ready/', ready_check, name='ready'),

    path('api/auth/', include('accounts.urls')),
    path('api/admin/', include(admin_api)),
    path('api/academy/', include(academy_api)),
    path('api/catalog/', include('catalog.urls')),
    path('api/uploads/', include('core.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
