import logging

from django.db.models import Avg
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from core.mixins import ConflictOnIntegrityErrorMixin
from ratings_app.models import Rating
from stores_app.api.filters import SortFilter, SubstringSearchFilter
from stores_app.api.serializers import AdminStoreSerializer
from stores_app.api.views import StoreViewSet
from stores_app.models import Store
from user_auth_app.api.permissions import capability_required
from user_auth_app.api.serializers import UserSerializer
from user_auth_app.capabilities import MANAGE_STORES, MANAGE_USERS, VIEW_DASHBOARD
from user_auth_app.models import User
from .filters import UserFilter
from .serializers import (
    AdminUserCreateSerializer,
    AdminUserDetailSerializer,
    AdminUserUpdateSerializer,
)

logger = logging.getLogger('store_ratings.admin')


class DashboardView(APIView):
    """
    Platform-wide counts for the admin dashboard.

    Endpoint:
        GET /api/admin/dashboard

        {"stats": {"totalUsers": 12, "totalStores": 4, "totalRatings": 31}}
    """
    permission_classes = [capability_required(VIEW_DASHBOARD)]

    def get(self, request, format=None):
        # Each count is a single SELECT COUNT(*) in the database.
        data = {
            'totalUsers': User.objects.count(),
            'totalStores': Store.objects.count(),
            'totalRatings': Rating.objects.count(),
        }
        return Response({'stats': data}, status=status.HTTP_200_OK)


class AdminUserViewSet(ConflictOnIntegrityErrorMixin, viewsets.ModelViewSet):
    """
    User management for administrators.

    - `GET /api/admin/users`: lists users; `search`, `role`, `sortBy`, `sortOrder`.
    - `POST /api/admin/users`: creates a user with any role.
    - `GET /api/admin/users/{id}`: one user, with the average rating of their stores for store
      owners.
    - `PUT/PATCH /api/admin/users/{id}`: updates name, email, address and role.
    - `DELETE /api/admin/users/{id}`: deletes the user and, by cascade, their ratings.
    """
    permission_classes = [capability_required(MANAGE_USERS)]
    pagination_class = None
    filter_backends = [DjangoFilterBackend, SubstringSearchFilter, SortFilter]
    filterset_class = UserFilter
    search_fields = ['name', 'email', 'address']
    sort_fields = ['name', 'email', 'address', 'role', 'created_at']
    default_sort = 'name'
    conflict_message = 'User with this email already exists.'

    def get_queryset(self):
        if self.action == 'retrieve':
            return User.objects.annotate(owned_average=Avg('owned_stores__ratings__rating'))
        return User.objects.all()

    def get_serializer_class(self):
        if self.action == 'create':
            return AdminUserCreateSerializer
        if self.action in ('update', 'partial_update'):
            return AdminUserUpdateSerializer
        if self.action == 'retrieve':
            return AdminUserDetailSerializer
        return UserSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response({'users': serializer.data})

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return Response({'user': serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)

        user = serializer.instance
        logger.info("User %s (%s) created by admin %s", user.pk, user.role, request.user.pk)
        return Response(
            {'message': 'User created successfully', 'user': UserSerializer(user).data},
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)

        return Response(
            {'message': 'User updated successfully', 'user': UserSerializer(instance).data}
        )

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        user_id = instance.pk
        self.perform_destroy(instance)

        logger.info("User %s deleted by admin %s", user_id, request.user.pk)
        return Response({'message': 'User deleted successfully'}, status=status.HTTP_200_OK)


class AdminStoreViewSet(StoreViewSet):
    """
    Store management for administrators under `/api/admin/stores`.

    Same behaviour as `/api/stores`, except that every action requires `manage_stores` and the
    listing also shows the owner's id and name instead of the caller's own rating.
    """

    def get_required_capability(self):
        return MANAGE_STORES

    def get_queryset(self):
        if self.action in self.read_actions:
            return Store.objects.with_rating_stats().with_owner_name()
        return Store.objects.all()

    def get_serializer_class(self):
        if self.action in self.read_actions:
            return AdminStoreSerializer
        return super().get_serializer_class()
