from rest_framework import serializers

from core.validators import ensure_email_available
from user_auth_app.models import User
from ..models import Store, format_average


class StoreListSerializer(serializers.ModelSerializer):
    """
    Read representation of a store with its rating aggregates.

    Expects instances from `Store.objects.with_rating_stats(user)`: `average_rating`,
    `total_ratings` and `user_rating` are annotations, not model fields.

    - `average_rating` is a string with one decimal place ("4.7", "0.0").
    - `user_rating` is the requesting user's own rating, or null.
    """
    average_rating = serializers.SerializerMethodField()
    total_ratings = serializers.IntegerField(read_only=True)
    user_rating = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Store
        fields = ['id', 'name', 'email', 'address', 'average_rating', 'total_ratings', 'user_rating']

    def get_average_rating(self, obj):
        return format_average(obj.average_rating)


class OwnedStoreSerializer(StoreListSerializer):
    """Store row for the owner's own listing; the caller's rating is not relevant there."""

    class Meta(StoreListSerializer.Meta):
        fields = ['id', 'name', 'email', 'address', 'average_rating', 'total_ratings']


class AdminStoreSerializer(StoreListSerializer):
    """
    Store row for the admin listing: aggregates plus the owner reference and name.

    Expects `with_owner_name()` on the queryset.
    """
    owner_name = serializers.CharField(read_only=True, allow_null=True)

    class Meta(StoreListSerializer.Meta):
        fields = [
            'id', 'name', 'email', 'address', 'owner_id', 'owner_name',
            'average_rating', 'total_ratings'
        ]


class StoreSerializer(serializers.ModelSerializer):
    """Plain store representation returned after a create or update."""

    class Meta:
        model = Store
        fields = ['id', 'name', 'email', 'address', 'owner_id', 'created_at', 'updated_at']
        read_only_fields = fields


class StoreWriteSerializer(serializers.ModelSerializer):
    """
    Validates store creation and updates.

    Input Fields:
        - name (str): At most 60 characters.
        - email (str): Must not be used by another store (409 otherwise).
        - address (str): At most 400 characters.
        - ownerId (int, optional): A user with the `store_owner` role, or null.

    On a full update (PUT) an omitted `ownerId` removes the current owner; a partial update (PATCH)
    leaves it untouched.
    """
    ownerId = serializers.IntegerField(required=False, allow_null=True, write_only=True)

    class Meta:
        model = Store
        fields = ['name', 'email', 'address', 'ownerId']
        extra_kwargs = {
            'email': {'validators': []},
        }

    def validate_email(self, value):
        return ensure_email_available(
            Store.objects.all(), value, self.instance,
            message='Store with this email already exists.'
        )

    def validate_ownerId(self, value):
        """Resolves the id to a user that exists and has the `store_owner` role."""
        if value is None:
            return None
        owner = User.objects.filter(pk=value).first()
        if owner is None:
            raise serializers.ValidationError('Owner not found.')
        if owner.role != User.Role.STORE_OWNER:
            raise serializers.ValidationError('Owner must be a store owner.')
        return owner

    def validate(self, attrs):
        if 'ownerId' in attrs:
            attrs['owner'] = attrs.pop('ownerId')
        elif not self.partial:
            attrs['owner'] = None
        return attrs
