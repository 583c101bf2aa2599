from django.urls import path

from .views import CurrentUserView, LoginView, LogoutView, RegistrationView

urlpatterns = [
    path('register', RegistrationView.as_view(), name='registration'),
    path('login', LoginView.as_view(), name='login'),
    path('logout', LogoutView.as_view(), name='logout'),
    path('me', CurrentUserView.as_view(), name='current-user'),
]
