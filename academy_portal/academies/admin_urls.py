from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('academies', views.AdminAcademyViewSet, basename='admin-academy')

urlpatterns = [
    path('impersonate/', views.ImpersonateView.as_view(), name='admin-impersonate'),
    path('', include(router.urls)),
]
