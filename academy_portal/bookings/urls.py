from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register('athletes', views.AthleteViewSet, basename='athlete')
router.register('blocks', views.BlockViewSet, basename='block')
router.register('bookings', views.BookingViewSet, basename='booking')
router.register('sessions', views.BookingSessionViewSet, basename='booking-session')

urlpatterns = [
    path('calendar/', views.CalendarView.as_view(), name='calendar'),
    path('', include(router.urls)),
]
