import logging

from rest_framework import status, viewsets
from rest_framework.response import Response

from core.mixins import ConflictOnIntegrityErrorMixin
from user_auth_app.api.permissions import capability_required
from user_auth_app.capabilities import BROWSE_STORES, MANAGE_STORES
from ..models import Store
from .filters import SortFilter, SubstringSearchFilter
from .serializers import StoreListSerializer, StoreSerializer, StoreWriteSerializer

logger = logging.getLogger('store_ratings.stores')


class StoreViewSet(ConflictOnIntegrityErrorMixin, viewsets.ModelViewSet):
    """
    Store browsing for every role, store management for admins.

    This ViewSet provides the following endpoints:
    - `GET /api/stores`: Lists stores with rating aggregates and the caller's own rating.
      Supports `search`, `sortBy` and `sortOrder`.
    - `GET /api/stores/{id}`: Retrieves a single store with the same fields.
    - `POST /api/stores`: Creates a store (admin).
    - `PUT/PATCH /api/stores/{id}`: Updates a store (admin).
    - `DELETE /api/stores/{id}`: Deletes a store and, by cascade, its ratings (admin).
    """
    pagination_class = None
    filter_backends = [SubstringSearchFilter, SortFilter]
    search_fields = ['name', 'email', 'address']
    sort_fields = ['name', 'email', 'address', 'average_rating']
    default_sort = 'name'
    conflict_message = 'Store with this email already exists.'

    read_actions = ('list', 'retrieve')
    list_key = 'stores'
    item_key = 'store'

    def get_required_capability(self):
        """
        Reading stores is open to every role that may browse; writes need `manage_stores`.
        """
        if self.action in self.read_actions:
            return BROWSE_STORES
        return MANAGE_STORES

    def get_permissions(self):
        self.permission_classes = [capability_required(self.get_required_capability())]
        return super().get_permissions()

    def get_queryset(self):
        """
        Read actions get the aggregated queryset; write actions operate on plain rows.
        """
        if self.action in self.read_actions:
            return Store.objects.with_rating_stats(self.request.user)
        return Store.objects.all()

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return StoreWriteSerializer
        return StoreListSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response({self.list_key: serializer.data})

    def retrieve(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_object())
        return Response({self.item_key: serializer.data})

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)

        store = serializer.instance
        logger.info("Store %s created by user %s", store.pk, request.user.pk)
        return Response(
            {'message': 'Store created successfully', 'store': StoreSerializer(store).data},
            status=status.HTTP_201_CREATED
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)

        return Response(
            {'message': 'Store updated successfully', 'store': StoreSerializer(instance).data}
        )

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        store_id = instance.pk
        self.perform_destroy(instance)

        logger.info("Store %s deleted by user %s", store_id, request.user.pk)
        return Response({'message': 'Store deleted successfully'}, status=status.HTTP_200_OK)
