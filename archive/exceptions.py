import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class AlreadyExists(APIException):
    """A natural key (slug, course code) is already taken in its scope. Body: {"detail": message}."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Already exists.'
    default_code = 'already_exists'


def api_exception_handler(exc, context):
    """
    DRF's handler first (validation, parse and 404 errors keep their status);
    anything it does not know becomes a logged 500 with a generic message.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get('view')
    logger.exception('Unhandled error in %s', type(view).__name__ if view else 'API view', exc_info=exc)
    return Response(
        {'detail': 'Internal server error.'},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
