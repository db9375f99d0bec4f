from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('locations', views.LocationViewSet, basename='location')
router.register('coaches', views.CoachViewSet, basename='coach')
router.register('programs', views.ProgramViewSet, basename='program')
router.register('assessments', views.AssessmentViewSet, basename='assessment')
router.register('packages', views.PackageViewSet, basename='package')
router.register('discounts', views.DiscountViewSet, basename='discount')

urlpatterns = [
    path('', include(router.urls)),
]
