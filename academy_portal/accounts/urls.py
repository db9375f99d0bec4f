from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from . import views

urlpatterns = [
    path('sign-in/', views.SignInView.as_view(), name='sign-in'),
    path('admin-sign-in/', views.AdminSignInView.as_view(), name='admin-sign-in'),
    path('sign-up/', views.SignUpView.as_view(), name='sign-up'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
    path('me/', views.MeView.as_view(), name='me'),
]
