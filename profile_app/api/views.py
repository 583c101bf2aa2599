import logging

from rest_framework import generics
from rest_framework.response import Response
from rest_framework.views import APIView

from ratings_app.models import Rating
from stores_app.api.serializers import OwnedStoreSerializer
from stores_app.models import Store
from user_auth_app.api.authentication import rotate_token
from user_auth_app.api.permissions import capability_required
from user_auth_app.api.serializers import UserSerializer
from user_auth_app.capabilities import MANAGE_PROFILE, VIEW_OWN_STORES
from .serializers import MyRatingSerializer, PasswordChangeSerializer, ProfileSerializer

logger = logging.getLogger('store_ratings.profile')


class MyStoresView(generics.ListAPIView):
    """
    `GET /api/users/my-stores`: the stores owned by the requesting store owner, with their
    average rating and rating count, ordered by name. Other roles get 403.
    """
    serializer_class = OwnedStoreSerializer
    permission_classes = [capability_required(VIEW_OWN_STORES)]
    pagination_class = None
    filter_backends = []

    def get_queryset(self):
        return (
            Store.objects.filter(owner=self.request.user)
            .with_rating_stats()
            .order_by('name')
        )

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'stores': serializer.data})


class MyRatingsView(generics.ListAPIView):
    """
    `GET /api/users/my-ratings`: every rating the requesting user submitted, most recently changed
    first.
    """
    serializer_class = MyRatingSerializer
    permission_classes = [capability_required(MANAGE_PROFILE)]
    pagination_class = None
    filter_backends = []

    def get_queryset(self):
        return (
            Rating.objects.filter(user=self.request.user)
            .select_related('store')
            .order_by('-updated_at')
        )

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'ratings': serializer.data})


class ProfileUpdateView(APIView):
    """
    `PUT /api/users/profile`: updates the requesting user's `name` and/or `address`.

    Fields that are not sent keep their value; an empty body is rejected with 400.
    """
    permission_classes = [capability_required(MANAGE_PROFILE)]

    def put(self, request):
        serializer = ProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response({
            'message': 'Profile updated successfully',
            'user': UserSerializer(user).data
        })


class PasswordChangeView(APIView):
    """
    `PUT /api/users/password`: changes the requesting user's password.

    The current password must be supplied and correct. On success every existing token of the user
    is revoked and a fresh token is returned, so other sessions have to log in again.
    """
    permission_classes = [capability_required(MANAGE_PROFILE)]

    def put(self, request):
        serializer = PasswordChangeSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        token = rotate_token(user)
        logger.info("User %s changed their password", user.pk)
        return Response({'message': 'Password updated successfully', 'token': token.key})
