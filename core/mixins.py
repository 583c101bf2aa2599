from django.db import IntegrityError, transaction

from .exceptions import Conflict


class ConflictOnIntegrityErrorMixin:
    """
    View mixin that turns a unique-constraint violation during save into a 409 response.

    Serializers check email uniqueness up front; this covers the window where two requests pass
    that check at the same time and the database constraint rejects the second insert.
    """
    conflict_message = 'The resource conflicts with an existing one.'

    def save_or_conflict(self, serializer, **kwargs):
        try:
            with transaction.atomic():
                return serializer.save(**kwargs)
        except IntegrityError:
            raise Conflict(self.conflict_message)

    def perform_create(self, serializer):
        self.save_or_conflict(serializer)

    def perform_update(self, serializer):
        self.save_or_conflict(serializer)
