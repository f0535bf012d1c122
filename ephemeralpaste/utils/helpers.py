"""Helper utilities for AWS lambda functions.

Functions:
    base_url(event) -> str
        Extract correct public base URL from API Gateway event (or BASE_URL)
    get_share_url(paste_id, event) -> str
        Get shareable URL for a given paste id
    current_time(event) -> datetime
        Reference time for the request (overridable in test mode)
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler errors into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from ephemeralpaste.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import logging
import functools
from datetime import datetime, UTC
from collections.abc import Callable

from ephemeralpaste.types import LambdaEvent
from ephemeralpaste.constants import ENV, TEST_NOW_HEADER, UNKNOWN_INTERNAL_SERVER_ERROR
from ephemeralpaste.utils.runtime import running_locally, test_mode_enabled


logger = logging.getLogger(__name__)


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL from API Gateway event

    `BASE_URL` takes precedence when set. Otherwise, a custom domain is used
    without the stage name, and the default AWS execute-api domain is used
    with the stage name.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://paste.example.com"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    configured = os.environ.get(ENV.App.BASE_URL)
    if configured:
        return configured

    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_share_url(paste_id: str, event: LambdaEvent) -> str:
    """Get shareable URL of a paste

    Args:
        paste_id (str): paste identifier
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: share url string representation, e.g. 'https://paste.example.com/p/abc12345'
    """
    return f'{base_url(event).rstrip("/")}/p/{paste_id}'


def current_time(event: LambdaEvent) -> datetime:
    """Return the reference time for a request

    With TEST_MODE=1, a numeric `x-test-now-ms` header (milliseconds since
    the epoch) replaces the wall clock. Malformed header values are ignored.

    Example:
        >>> os.environ['TEST_MODE'] = '1'
        >>> current_time({'headers': {'x-test-now-ms': '0'}})
        datetime.datetime(1970, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if test_mode_enabled():
        headers = {k.lower(): v for k, v in (event.get('headers') or {}).items()}
        raw = headers.get(TEST_NOW_HEADER)
        if raw is not None:
            try:
                return datetime.fromtimestamp(int(raw) / 1000, tz=UTC)
            except (TypeError, ValueError, OverflowError):
                logger.debug('Ignoring malformed test time header.', extra={'header': TEST_NOW_HEADER, 'value': raw})
    return datetime.now(UTC)


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with 500 instead of crashing on unexpected errors

    When running locally the error is re-raised to keep the traceback visible.
    """

    @functools.wraps(handler)
    def wrapper(event, context, *args, **kwargs):
        try:
            return handler(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled error in lambda handler. Responding with 500.')
            return {
                'statusCode': 500,
                'headers': {'Content-Type': 'application/json'},
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
