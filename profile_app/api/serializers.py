from rest_framework import serializers

from ratings_app.models import Rating
from user_auth_app.api.serializers import validate_new_password
from user_auth_app.models import User


class ProfileSerializer(serializers.ModelSerializer):
    """
    Validates a user's update of their own profile.

    Only `name` and `address` can be changed here; email and role are managed by administrators.
    The same bounds as at registration apply (name 20-60, address at most 400 characters).
    """

    class Meta:
        model = User
        fields = ['name', 'address']

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError('No fields to update.')
        return attrs


class PasswordChangeSerializer(serializers.Serializer):
    """
    Validates a password change of the requesting user.

    Input Fields:
        - currentPassword (str): Must match the stored hash.
        - newPassword (str): Must satisfy the password policy.
    """
    currentPassword = serializers.CharField(trim_whitespace=False, write_only=True)
    newPassword = serializers.CharField(trim_whitespace=False, write_only=True)

    def validate_currentPassword(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError('Current password is incorrect.')
        return value

    def validate_newPassword(self, value):
        return validate_new_password(value, self.context['request'].user)

    def save(self, **kwargs):
        user = self.context['request'].user
        user.set_password(self.validated_data['newPassword'])
        user.save(update_fields=['password', 'updated_at'])
        return user


class MyRatingSerializer(serializers.ModelSerializer):
    """A rating the requesting user submitted, with the rated store's details."""
    store_id = serializers.IntegerField(read_only=True)
    store_name = serializers.CharField(source='store.name', read_only=True)
    store_address = serializers.CharField(source='store.address', read_only=True)

    class Meta:
        model = Rating
        fields = [
            'id',
            'rating',
            'store_id',
            'store_name',
            'store_address',
            'created_at',
            'updated_at',
        ]
