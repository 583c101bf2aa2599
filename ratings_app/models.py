from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Avg, Count, Max, Min, Q

from stores_app.models import format_average

MIN_RATING = 1
MAX_RATING = 5

# Response keys of the star distribution, keyed by star value.
DISTRIBUTION_KEYS = {
    5: 'five_star',
    4: 'four_star',
    3: 'three_star',
    2: 'two_star',
    1: 'one_star',
}


class RatingQuerySet(models.QuerySet):

    def upsert(self, user, store, value):
        """
        Stores `user`'s rating of `store`, creating or replacing it in one atomic step.

        Uses `update_or_create`, which runs in a transaction, locks an existing row with
        SELECT ... FOR UPDATE, and otherwise inserts. If a concurrent request inserts the same
        (user, store) pair first, the unique constraint rejects our insert and the existing row is
        updated instead. `created_at` of an existing rating is kept; `updated_at` is refreshed.

        Returns:
            tuple: (Rating, created) where `created` is True for a new rating.
        """
        return self.update_or_create(user=user, store=store, defaults={'rating': value})

    def statistics(self):
        """
        Aggregates the ratings in this queryset: count, formatted average, min/max and the
        per-star distribution. An empty queryset reports zeros and an average of "0.0".
        """
        aggregates = {
            'total_ratings': Count('id'),
            'average_rating': Avg('rating'),
            'min_rating': Min('rating'),
            'max_rating': Max('rating'),
        }
        for star, key in DISTRIBUTION_KEYS.items():
            aggregates[key] = Count('id', filter=Q(rating=star))
        result = self.aggregate(**aggregates)

        return {
            'total_ratings': result['total_ratings'],
            'average_rating': format_average(result['average_rating']),
            'min_rating': result['min_rating'] or 0,
            'max_rating': result['max_rating'] or 0,
            'rating_distribution': {key: result[key] for key in DISTRIBUTION_KEYS.values()},
        }


class Rating(models.Model):
    """
    A star rating given by a user to a store.

    A user can rate a given store only once; submitting again replaces the value. This is enforced
    by a unique constraint on (user, store).

    Attributes:
        user (ForeignKey): The user who gave the rating.
        store (ForeignKey): The rated store.
        rating (PositiveSmallIntegerField): A star rating from 1 to 5.
        created_at (DateTimeField): When the rating was first submitted.
        updated_at (DateTimeField): When the rating was last changed.
    """
    # Deleting the user or the store deletes its ratings.
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='ratings',
        on_delete=models.CASCADE,
        help_text="The user who rated the store."
    )
    store = models.ForeignKey(
        'stores_app.Store',
        related_name='ratings',
        on_delete=models.CASCADE,
        help_text="The store being rated."
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)],
        help_text="The rating given, from 1 to 5."
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = RatingQuerySet.as_manager()

    class Meta:
        ordering = ['-updated_at']
        unique_together = ('user', 'store')
        verbose_name = "Rating"
        verbose_name_plural = "Ratings"

    def __str__(self):
        return f"Rating by {self.user.name} for {self.store.name} ({self.rating} stars)"
