from rest_framework import serializers

from ..models import MAX_RATING, MIN_RATING, Rating


class RatingSubmitSerializer(serializers.Serializer):
    """Validates a submitted rating: an integer from 1 to 5."""
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)


class RatingDeleteSerializer(serializers.Serializer):
    """Identifies whose rating an administrator wants to remove."""
    userId = serializers.IntegerField(min_value=1)


class StoreRatingSerializer(serializers.ModelSerializer):
    """
    A rating as shown to the owner of the rated store, including who submitted it.
    """
    user_id = serializers.IntegerField(read_only=True)
    user_name = serializers.CharField(source='user.name', read_only=True)
    user_email = serializers.EmailField(source='user.email', read_only=True)
    user_address = serializers.CharField(source='user.address', read_only=True)

    class Meta:
        model = Rating
        fields = [
            'id',
            'rating',
            'user_id',
            'user_name',
            'user_email',
            'user_address',
            'created_at',
            'updated_at',
        ]
