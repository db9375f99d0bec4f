from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('promo-codes', views.PromoCodeViewSet, basename='promo-code')

urlpatterns = [
    path('', include(router.urls)),
]
