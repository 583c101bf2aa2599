from rest_framework import serializers

from stores_app.models import format_average
from user_auth_app.api.serializers import UserSerializer, UserWriteSerializer, validate_new_password
from user_auth_app.capabilities import VIEW_OWN_STORES
from user_auth_app.models import User


class AdminUserDetailSerializer(UserSerializer):
    """
    A user as shown on the admin detail page.

    For store owners `average_rating` is the mean of all ratings of the stores they own (formatted
    like store averages); for every other role it is null. Expects the `owned_average` annotation.
    """
    average_rating = serializers.SerializerMethodField()

    class Meta(UserSerializer.Meta):
        fields = UserSerializer.Meta.fields + ['average_rating']
        read_only_fields = UserSerializer.Meta.fields

    def get_average_rating(self, obj):
        if not obj.can(VIEW_OWN_STORES):
            return None
        return format_average(obj.owned_average)


class AdminUserCreateSerializer(UserWriteSerializer):
    """
    Creates an account on behalf of an administrator.

    Same validation as self-registration, except that any role can be assigned (default `user`).
    """
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        style={'input_type': 'password'}
    )

    class Meta(UserWriteSerializer.Meta):
        fields = ['name', 'email', 'password', 'address', 'role']

    def validate_password(self, value):
        return validate_new_password(value)

    def create(self, validated_data):
        password = validated_data.pop('password')
        return User.objects.create_user(password=password, **validated_data)


class AdminUserUpdateSerializer(UserWriteSerializer):
    """
    Updates the account fields and role of a user. Passwords are not changed here.

    A store owner keeps the `store_owner` role while any store still names them as owner; the
    stores have to be reassigned first.
    """

    class Meta(UserWriteSerializer.Meta):
        fields = ['name', 'email', 'address', 'role']

    def validate_role(self, value):
        if (
            self.instance is not None
            and self.instance.role == User.Role.STORE_OWNER
            and value != User.Role.STORE_OWNER
            and self.instance.owned_stores.exists()
        ):
            raise serializers.ValidationError(
                'User still owns stores; reassign them before changing the role.'
            )
        return value
