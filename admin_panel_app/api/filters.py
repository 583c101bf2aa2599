import django_filters

from user_auth_app.models import User


class UserFilter(django_filters.FilterSet):
    """
    FilterSet for the admin user listing.

    `?role=store_owner` restricts the list to one role; a value outside the known roles is
    rejected with 400.
    """
    role = django_filters.ChoiceFilter(choices=User.Role.choices)

    class Meta:
        model = User
        fields = ['role']
