import logging
from typing import Dict
from fastapi import HTTPException, Request, status

from streamhub.core.exceptions import BaseAppException

logger = logging.getLogger(__name__)

# Query parameters that drive paging/sorting rather than filtering
RESERVED_PARAMS = {"page", "limit", "sort", "q"}


def handle_exception(e: Exception) -> HTTPException:
    """Convert domain exceptions to HTTP responses."""
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, BaseAppException):
        return HTTPException(status_code=e.status_code, detail=e.message)
    logger.exception(f"Unhandled error: {str(e)}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An internal server error occurred",
    )


def collect_filters(request: Request) -> Dict[str, str]:
    """Every non-reserved query parameter is a requested filter.

    Unknown keys are left in; the filter compiler rejects them.
    """
    return {
        key: value
        for key, value in request.query_params.items()
        if key not in RESERVED_PARAMS
    }
