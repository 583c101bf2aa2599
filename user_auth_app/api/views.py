import logging

from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.mixins import ConflictOnIntegrityErrorMixin
from .authentication import issue_token
from .serializers import LoginSerializer, RegistrationSerializer, UserSerializer

logger = logging.getLogger('store_ratings.auth')


class RegistrationView(ConflictOnIntegrityErrorMixin, APIView):
    """
    Handles new user registration.

    Endpoint:
        POST /api/auth/register

    Request Body:
        - name (str): Full name, 20 to 60 characters.
        - email (str): The user's email address. Must be unique.
        - password (str): 8-16 characters with an uppercase and a special character.
        - address (str): Optional postal address, at most 400 characters.

    Responses:
        - 201 Created: `{"token": "...", "user": {...}}`
        - 400 Bad Request: validation failed; the body holds the field errors.
        - 409 Conflict: the email is already registered.
    """
    permission_classes = [AllowAny]
    authentication_classes = []
    conflict_message = 'User with this email already exists.'

    def post(self, request):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = self.save_or_conflict(serializer)

        token = issue_token(user)
        logger.info("Registered user %s", user.pk)
        return Response(
            {'token': token.key, 'user': UserSerializer(user).data},
            status=status.HTTP_201_CREATED
        )


class LoginView(APIView):
    """
    Exchanges email and password for a bearer token.

    Endpoint:
        POST /api/auth/login

    Responses:
        - 200 OK: `{"token": "...", "user": {...}}`
        - 400 Bad Request: missing fields or invalid credentials.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']
        token = issue_token(user)
        return Response(
            {'token': token.key, 'user': UserSerializer(user).data},
            status=status.HTTP_200_OK
        )


class LogoutView(APIView):
    """Revokes the caller's token. `POST /api/auth/logout` → 204."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        Token.objects.filter(user=request.user).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


class CurrentUserView(APIView):
    """Returns the authenticated account. `GET /api/auth/me`."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'user': UserSerializer(request.user).data})
