from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.core.validators import MinLengthValidator
from django.db import models

from .capabilities import ROLE_CAPABILITIES

NAME_MIN_LENGTH = 20
NAME_MAX_LENGTH = 60
ADDRESS_MAX_LENGTH = 400


class UserManager(BaseUserManager):
    """
    Manager for the custom `User` model.

    Emails are stored exactly as given. `normalize_email` is deliberately not applied because
    uniqueness is an exact, case-sensitive match on the stored value.
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Creates and saves a user with the given email and password.

        The password is hashed with the first configured hasher (bcrypt); the plaintext is never
        stored.
        """
        if not email:
            raise ValueError('Users must have an email address.')
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Creates an administrator. Used by `createsuperuser`."""
        extra_fields['role'] = User.Role.ADMIN
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser):
    """
    An account of the store rating platform.

    Every account carries exactly one role, which decides what the account may do (see
    `user_auth_app.capabilities`). Authentication uses the email address as the login identifier.

    Attributes:
        name (CharField): Full name, 20 to 60 characters.
        email (EmailField): Login identifier, unique across all users.
        address (CharField): Postal address, at most 400 characters.
        role (CharField): One of `user`, `store_owner` or `admin`.
        is_active (BooleanField): Inactive accounts cannot authenticate.
        created_at (DateTimeField): Set once when the account is created.
        updated_at (DateTimeField): Refreshed on every save.
    """

    class Role(models.TextChoices):
        USER = 'user', 'Normal user'
        STORE_OWNER = 'store_owner', 'Store owner'
        ADMIN = 'admin', 'Administrator'

    name = models.CharField(
        max_length=NAME_MAX_LENGTH,
        validators=[MinLengthValidator(NAME_MIN_LENGTH)],
        help_text="Full name, between 20 and 60 characters."
    )
    email = models.EmailField(unique=True)
    address = models.CharField(max_length=ADDRESS_MAX_LENGTH, blank=True, default='')
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.USER)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        ordering = ['name']
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.name} <{self.email}> ({self.get_role_display()})"

    def can(self, capability):
        """Returns True if this user's role grants `capability`."""
        return capability in ROLE_CAPABILITIES.get(self.role, frozenset())

    # Hooks used by the Django admin site.
    @property
    def is_staff(self):
        return self.role == self.Role.ADMIN

    def has_perm(self, perm, obj=None):
        return self.is_active and self.is_staff

    def has_module_perms(self, app_label):
        return self.is_active and self.is_staff
