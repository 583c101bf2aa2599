"""
Root URL configuration.

All REST endpoints live under /api/; each app contributes its own URLconf.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('api/auth/', include('user_auth_app.api.urls')),
    path('api/', include('stores_app.api.urls')),
    path('api/ratings/', include('ratings_app.api.urls')),
    path('api/users/', include('profile_app.api.urls')),
    path('api/admin/', include('admin_panel_app.api.urls')),
]
