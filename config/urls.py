"""URL configuration for the house rental project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
JWT token endpoints and the application-level routers provided by
Django Rest Framework.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/v1/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/v1/bookings/', include('apps.bookings.urls')),
]
