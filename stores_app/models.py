from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db import models
from django.db.models import Avg, Count, F, FloatField, Max, Q, Value
from django.db.models.functions import Coalesce

STORE_NAME_MAX_LENGTH = 60
STORE_ADDRESS_MAX_LENGTH = 400


def format_average(value):
    """
    Formats an average rating for the API: one decimal place, rounded half up, as a string.

    `None` (no ratings) is reported as "0.0", e.g. 4.666 -> "4.7", 4.25 -> "4.3".
    """
    if value is None:
        value = 0
    return str(Decimal(str(value)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


class StoreQuerySet(models.QuerySet):
    """Query helpers that attach rating aggregates to stores."""

    def with_rating_stats(self, user=None):
        """
        Annotates every store with `average_rating` and `total_ratings`.

        Both are computed with a LEFT JOIN on the ratings, so a store without ratings reports an
        average of 0.0 and a count of 0. When `user` is given, `user_rating` holds that user's own
        rating of the store (NULL when they have not rated it). At most one rating exists per
        (user, store), so `Max` over the filtered rows is exactly that rating.
        """
        queryset = self.annotate(
            average_rating=Coalesce(
                Avg('ratings__rating'), Value(0.0), output_field=FloatField()
            ),
            total_ratings=Count('ratings'),
        )
        if user is not None:
            queryset = queryset.annotate(
                user_rating=Max('ratings__rating', filter=Q(ratings__user=user))
            )
        return queryset

    def with_owner_name(self):
        """Annotates `owner_name` (NULL for stores without an owner)."""
        return self.annotate(owner_name=F('owner__name'))


class Store(models.Model):
    """
    A store that users can rate.

    Attributes:
        name (CharField): Display name of the store.
        email (EmailField): Contact email, unique across all stores.
        address (CharField): Postal address, at most 400 characters.
        owner (ForeignKey): Optional user with the `store_owner` role who may see the store's
            ratings. Deleting the owner keeps the store and clears the reference.
        created_at (DateTimeField): Timestamp of when the store was created.
        updated_at (DateTimeField): Timestamp of the last update.
    """
    name = models.CharField(max_length=STORE_NAME_MAX_LENGTH)
    email = models.EmailField(unique=True)
    address = models.CharField(max_length=STORE_ADDRESS_MAX_LENGTH)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='owned_stores',
        limit_choices_to={'role': 'store_owner'},
        help_text="The store owner who can view this store's ratings."
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StoreQuerySet.as_manager()

    class Meta:
        ordering = ['name']
        verbose_name = "Store"
        verbose_name_plural = "Stores"

    def __str__(self):
        return self.name
