from django.urls import path

from . import views

urlpatterns = [
    path('', views.OnboardingView.as_view(), name='onboarding'),
    path('complete/', views.OnboardingCompleteView.as_view(), name='onboarding-complete'),
]
