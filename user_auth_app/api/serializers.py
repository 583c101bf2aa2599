import logging

from django.contrib.auth import authenticate, password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from core.validators import ensure_email_available
from user_auth_app.models import User

logger = logging.getLogger('store_ratings.auth')


class UserSerializer(serializers.ModelSerializer):
    """
    Read representation of a user account.

    Used wherever a user is returned to the client (registration, login, profile, admin listings).
    The password hash is never part of the output.
    """

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'address', 'role', 'created_at']
        read_only_fields = fields


def validate_new_password(value, user=None):
    """
    Runs the configured password validators and re-raises their errors as DRF validation errors.
    """
    try:
        password_validation.validate_password(value, user)
    except DjangoValidationError as exc:
        raise serializers.ValidationError(list(exc.messages))
    return value


class UserWriteSerializer(serializers.ModelSerializer):
    """
    Base serializer for writes that carry the account fields `name`, `email` and `address`.

    Email uniqueness is checked here instead of by DRF's `UniqueValidator` so a duplicate is
    reported as 409 Conflict rather than 400. On update the edited account itself is excluded from
    the check.
    """

    class Meta:
        model = User
        fields = ['name', 'email', 'address']
        extra_kwargs = {
            'email': {'validators': []},
        }

    def validate_email(self, value):
        return ensure_email_available(
            User.objects.all(), value, self.instance,
            message='User with this email already exists.'
        )


class RegistrationSerializer(UserWriteSerializer):
    """
    Handles self-registration of a new account.

    Input Fields:
        - name (str): 20 to 60 characters.
        - email (str): Valid and not yet used by another account.
        - password (str): Must satisfy the password policy.
        - address (str): Optional, at most 400 characters.

    Self-registered accounts always get the `user` role; other roles are assigned by an admin.
    """
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        style={'input_type': 'password'}
    )

    class Meta(UserWriteSerializer.Meta):
        fields = ['name', 'email', 'password', 'address']

    def validate_password(self, value):
        return validate_new_password(value)

    def create(self, validated_data):
        """Creates the account through `create_user` so the password gets hashed."""
        password = validated_data.pop('password')
        validated_data['role'] = User.Role.USER
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    """
    Authenticates a user by email and password.

    On success the authenticated user is placed in `validated_data['user']`. Unknown emails, wrong
    passwords and inactive accounts all fail with the same message.
    """
    email = serializers.EmailField()
    password = serializers.CharField(
        label="Password",
        style={'input_type': 'password'},
        trim_whitespace=False
    )

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get('request'),
            username=attrs['email'],
            password=attrs['password']
        )

        if not user:
            logger.info("Failed login attempt for %s", attrs['email'])
            raise serializers.ValidationError(
                'Invalid email or password.', code='authorization'
            )

        attrs['user'] = user
        return attrs
