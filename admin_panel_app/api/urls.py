from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import AdminStoreViewSet, AdminUserViewSet, DashboardView

router = SimpleRouter(trailing_slash=False)
router.register(r'users', AdminUserViewSet, basename='admin-user')
router.register(r'stores', AdminStoreViewSet, basename='admin-store')

urlpatterns = [
    path('dashboard', DashboardView.as_view(), name='admin-dashboard'),
] + router.urls
