"""Health probe and JWT auth under /api/.

    GET  health/        database check, no auth
    POST auth/login/    access + refresh token, user with queue rights
    POST auth/refresh/  new access token
    GET  auth/me/       current user
"""

from django.urls import path

from rest_framework_simplejwt.views import TokenRefreshView

from clinicqueue.core import views

app_name = 'core'

urlpatterns = [
    path('health/', views.health, name='health'),
    path('auth/login/', views.LoginView.as_view(), name='login'),
    path('auth/refresh/', TokenRefreshView.as_view(), name='refresh'),
    path('auth/me/', views.MeView.as_view(), name='me'),
]
