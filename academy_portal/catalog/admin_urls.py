from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('sports', views.AdminSportViewSet, basename='admin-sport')
router.register('spoken-languages', views.AdminSpokenLanguageViewSet, basename='admin-spoken-language')
router.register('genders', views.AdminGenderViewSet, basename='admin-gender')
router.register('facilities', views.AdminFacilityViewSet, basename='admin-facility')
router.register('pages', views.AdminPageViewSet, basename='admin-page')

urlpatterns = [
    path('', include(router.urls)),
]
