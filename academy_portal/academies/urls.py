from django.urls import path

from . import views

urlpatterns = [
    path('status/', views.AcademyStatusView.as_view(), name='academy-status'),
    path('details/', views.AcademyDetailsView.as_view(), name='academy-details'),
]
