from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('sports', views.SportListViewSet, basename='sport')
router.register('spoken-languages', views.SpokenLanguageListViewSet, basename='spoken-language')
router.register('genders', views.GenderListViewSet, basename='gender')
router.register('facilities', views.FacilityListViewSet, basename='facility')

urlpatterns = [
    path('', include(router.urls)),
]
