from django.urls import path

from .views import MyRatingsView, MyStoresView, PasswordChangeView, ProfileUpdateView

urlpatterns = [
    path('my-stores', MyStoresView.as_view(), name='my-stores'),
    path('my-ratings', MyRatingsView.as_view(), name='my-ratings'),
    path('profile', ProfileUpdateView.as_view(), name='profile-update'),
    path('password', PasswordChangeView.as_view(), name='password-change'),
]
