import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong."


def api_exception_handler(exc, context):
    """
    Defer to DRF for API exceptions; anything else (database errors included)
    is logged and rendered as a generic 500 instead of an HTML error page.
    """

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception(
        "Unhandled error in %s: %s",
        view.__class__.__name__ if view is not None else "unknown view",
        exc,
        exc_info=exc,
    )
    return Response(
        {"detail": GENERIC_ERROR_MESSAGE},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
