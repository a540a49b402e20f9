from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from .views import (
    register,
    onboarding,
    profile_view,
    me,
    change_password,
)

urlpatterns = [
    path('register/', register, name='register'),
    path('login/', TokenObtainPairView.as_view(), name='login'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('me/', me, name='me'),
    path('onboarding/', onboarding, name='onboarding'),
    path('profile/', profile_view, name='profile'),
    path('change-password/', change_password, name='change_password'),
]
