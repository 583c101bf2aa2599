from django.urls import path

from .views import StoreRatingListView, StoreRatingStatsView, StoreRatingView

urlpatterns = [
    path('store/<int:store_id>', StoreRatingListView.as_view(), name='store-rating-list'),
    path('store/<int:store_id>/stats', StoreRatingStatsView.as_view(), name='store-rating-stats'),
    path('<int:store_id>', StoreRatingView.as_view(), name='store-rating'),
]
