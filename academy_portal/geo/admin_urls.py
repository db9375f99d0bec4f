from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('countries', views.CountryViewSet, basename='admin-country')
router.register('states', views.StateViewSet, basename='admin-state')
router.register('cities', views.CityViewSet, basename='admin-city')

urlpatterns = [
    path('', include(router.urls)),
]
