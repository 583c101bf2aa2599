import logging

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from stores_app.models import Store
from user_auth_app.api.permissions import IsStoreOwnerOrAdmin, capability_required
from user_auth_app.capabilities import MANAGE_RATINGS, RATE_STORES, VIEW_STORE_RATINGS
from ..models import Rating
from .serializers import RatingDeleteSerializer, RatingSubmitSerializer, StoreRatingSerializer

logger = logging.getLogger('store_ratings.ratings')


class StoreLookupMixin:
    """
    Resolves the `store_id` URL argument to a `Store`, raising 404 if it does not exist.

    With `check_permissions=True` the view's object-level permissions (store ownership) are
    checked against the store.
    """

    def get_store(self, check_permissions=False):
        store = get_object_or_404(Store, pk=self.kwargs['store_id'])
        if check_permissions:
            self.check_object_permissions(self.request, store)
        return store


class StoreRatingView(StoreLookupMixin, APIView):
    """
    The caller's rating of one store.

    Endpoints:
    - `GET /api/ratings/{store_id}`: the caller's own rating, `{"rating": 4}` or `{"rating": null}`.
    - `POST /api/ratings/{store_id}`: submit or replace the caller's rating.
      201 when a new rating was created, 200 when an existing one was updated.
    - `DELETE /api/ratings/{store_id}`: admin only, removes the rating of `userId` (request body).
    """

    def get_permissions(self):
        if self.request.method == 'DELETE':
            self.permission_classes = [capability_required(MANAGE_RATINGS)]
        else:
            self.permission_classes = [capability_required(RATE_STORES)]
        return super().get_permissions()

    def get(self, request, store_id):
        store = self.get_store()
        value = (
            Rating.objects.filter(user=request.user, store=store)
            .values_list('rating', flat=True)
            .first()
        )
        return Response({'rating': value})

    def post(self, request, store_id):
        serializer = RatingSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        store = self.get_store()

        rating, created = Rating.objects.upsert(
            request.user, store, serializer.validated_data['rating']
        )
        logger.info(
            "User %s %s rating %s for store %s",
            request.user.pk, 'created' if created else 'updated', rating.rating, store.pk
        )

        if created:
            return Response(
                {'message': 'Rating submitted successfully', 'rating': rating.rating},
                status=status.HTTP_201_CREATED
            )
        return Response(
            {'message': 'Rating updated successfully', 'rating': rating.rating},
            status=status.HTTP_200_OK
        )

    def delete(self, request, store_id):
        serializer = RatingDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        deleted, _ = Rating.objects.filter(
            store_id=store_id, user_id=serializer.validated_data['userId']
        ).delete()
        if not deleted:
            raise NotFound('Rating not found.')

        logger.info(
            "Rating of user %s for store %s deleted by admin %s",
            serializer.validated_data['userId'], store_id, request.user.pk
        )
        return Response({'message': 'Rating deleted successfully'}, status=status.HTTP_200_OK)


class StoreRatingListView(StoreLookupMixin, generics.ListAPIView):
    """
    All ratings of a store together with the raters' details, newest first.

    `GET /api/ratings/store/{store_id}`: available to the store's owner and to admins; any other
    store owner gets 403, roles without `view_store_ratings` get 403 as well.
    """
    serializer_class = StoreRatingSerializer
    permission_classes = [capability_required(VIEW_STORE_RATINGS), IsStoreOwnerOrAdmin]
    pagination_class = None
    filter_backends = []

    def get_queryset(self):
        store = self.get_store(check_permissions=True)
        return (
            Rating.objects.filter(store=store)
            .select_related('user')
            .order_by('-created_at')
        )

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response({'ratings': serializer.data})


class StoreRatingStatsView(StoreLookupMixin, APIView):
    """
    Aggregate statistics of a store's ratings.

    `GET /api/ratings/store/{store_id}/stats` (store owner of that store, or admin):

        {"stats": {"total_ratings": 3, "average_rating": "4.7", "min_rating": 4,
                   "max_rating": 5, "rating_distribution": {"five_star": 2, ...}}}
    """
    permission_classes = [capability_required(VIEW_STORE_RATINGS), IsStoreOwnerOrAdmin]

    def get(self, request, store_id):
        store = self.get_store(check_permissions=True)
        return Response({'stats': Rating.objects.filter(store=store).statistics()})
