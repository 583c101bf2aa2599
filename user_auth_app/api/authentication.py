from django.conf import settings
from django.utils import timezone
from rest_framework import exceptions
from rest_framework.authentication import TokenAuthentication
from rest_framework.authtoken.models import Token


def token_expired(token):
    """Returns True once `token` is older than the configured `TOKEN_TTL`."""
    return token.created < timezone.now() - settings.TOKEN_TTL


class BearerTokenAuthentication(TokenAuthentication):
    """
    Token authentication using the `Authorization: Bearer <key>` header.

    Behaves like DRF's `TokenAuthentication` but with the `Bearer` keyword, and rejects tokens that
    have outlived `settings.TOKEN_TTL`. An expired token is deleted so the client has to log in
    again to obtain a fresh one.
    """
    keyword = 'Bearer'
    model = Token

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)

        if token_expired(token):
            token.delete()
            raise exceptions.AuthenticationFailed('Token has expired.')

        return user, token


def issue_token(user):
    """
    Returns a usable token for `user`, replacing a stored one that has already expired.
    """
    token, created = Token.objects.get_or_create(user=user)
    if not created and token_expired(token):
        token.delete()
        token = Token.objects.create(user=user)
    return token


def rotate_token(user):
    """Revokes the user's current token and issues a new one."""
    Token.objects.filter(user=user).delete()
    return Token.objects.create(user=user)
