from .exceptions import Conflict


def ensure_email_available(queryset, email, instance=None, message=None):
    """
    Raises `Conflict` when another row of `queryset` already uses `email`.

    The comparison is an exact match. On update the row being edited (`instance`) is excluded so
    saving an unchanged email does not conflict with itself.
    """
    matches = queryset.filter(email=email)
    if instance is not None:
        matches = matches.exclude(pk=instance.pk)
    if matches.exists():
        raise Conflict(message or 'This email address is already in use.')
    return email
