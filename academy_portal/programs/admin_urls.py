from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('branches', views.AdminBranchViewSet, basename='admin-branch')

urlpatterns = [
    path('', include(router.urls)),
]
