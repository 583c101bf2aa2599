import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger('store_ratings.api')


class Conflict(APIException):
    """
    Raised when a write would violate a uniqueness rule, e.g. a second user or store with an email
    that is already taken.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The resource conflicts with an existing one.'
    default_code = 'conflict'


def api_exception_handler(exc, context):
    """
    Project-wide DRF exception handler.

    Known API errors (401, 403, 404, 409, 400 ...) are rendered by DRF's default handler. Anything
    else is an unexpected failure: it is logged with its traceback and reported to the client as a
    generic 500 so no internals (SQL, stack frames) leak into the response.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception(
        "Unhandled error in %s", view.__class__.__name__ if view else 'unknown view'
    )
    return Response(
        {'detail': 'Internal server error.'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
