import logging

from ephemeralpaste.types import LambdaContext, LambdaEvent, LambdaResponse
from ephemeralpaste.exceptions import BackendUnavailableError, PasteNotFoundError
from ephemeralpaste.utils import current_time, guarantee_500_response
from ephemeralpaste.lambdas.responses import response_200, response_404, response_503
from ephemeralpaste.lambdas.service_provider import get_service
from ephemeralpaste.lambdas.fetch_paste.constants import PASTE_SERVED, PASTE_NOT_FOUND, BACKEND_UNAVAILABLE


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to read a paste

    Every successful response counts as one view of the paste.

    HTTP responses:
        200: Paste served
            content: paste text
            remaining_views: views left after this one, or null if unlimited
            expires_at: ISO-8601 expiry time, or null
        404: Paste not found
            (malformed id, never created, expired, or no views left)
        503: Service unavailable
            the paste store can't be reached

    Args:
        event (dict):
            API Gateway event payload containing the `id` path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'id': 'abc12345'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
    """
    paste_id = (event.get('pathParameters') or {}).get('id')

    try:
        view = get_service().access(paste_id, now=current_time(event))
    except PasteNotFoundError:
        logger.info('Paste not found. Responding with 404.', extra={'pasteId': paste_id, 'event': PASTE_NOT_FOUND})
        return response_404()
    except BackendUnavailableError:
        logger.exception('Paste store unavailable. Responding with 503.', extra={'pasteId': paste_id, 'event': BACKEND_UNAVAILABLE})
        return response_503()

    logger.info(
        'Paste served. Responding with 200.',
        extra={'pasteId': paste_id, 'remainingViews': view.remaining_views, 'event': PASTE_SERVED},
    )
    return response_200(
        {
            'content': view.content,
            'remaining_views': view.remaining_views,
            'expires_at': view.expires_at.isoformat() if view.expires_at is not None else None,
        }
    )
