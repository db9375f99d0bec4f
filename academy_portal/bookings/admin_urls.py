from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('athletes', views.AdminAthleteViewSet, basename='admin-athlete')

urlpatterns = [
    path('', include(router.urls)),
]
