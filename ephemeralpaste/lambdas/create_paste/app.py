import json
import logging

from ephemeralpaste.types import LambdaContext, LambdaEvent, LambdaResponse
from ephemeralpaste.exceptions import BackendUnavailableError, ValidationError
from ephemeralpaste.utils import current_time, get_share_url, guarantee_500_response
from ephemeralpaste.lambdas.responses import response_201, response_400, response_500
from ephemeralpaste.lambdas.service_provider import get_service
from ephemeralpaste.lambdas.create_paste.constants import PASTE_CREATED, INVALID_INPUT, BACKEND_UNAVAILABLE


logger = logging.getLogger(__name__)


def _isoformat(value) -> str | None:
    return value.isoformat() if value is not None else None


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to create pastes

    This Lambda handler follows this procedure to create pastes:
    - Step 1: Extract paste input from request body
    - Step 2: Create the paste (validates input and stores it)
    - Step 3: Respond with the paste id and its shareable URL

    HTTP responses:
        201: Paste created
            id: paste identifier
            url: shareable URL (<base url>/p/<id>)
            created_at: ISO-8601 creation time
            expires_at: ISO-8601 expiry time, or null
        400: Bad client request
            error: 'Invalid input'
            details: list of problems with the input
        500: Internal server error
            error: the paste couldn't be stored

    Args:
        event (dict):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'body': '{"content": "hello", "ttl_seconds": 60, "max_views": 2}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['url']
        'http://localhost:3000/p/3f9a0c1e'
    """
    # 1- Extract paste input from request body
    try:
        body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_INPUT})
        return response_400(['request body must be valid JSON'])
    if not isinstance(body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_INPUT})
        return response_400(['request body must be a JSON object'])

    # 2- Create the paste
    try:
        created = get_service().create(
            content=body.get('content'),
            ttl_seconds=body.get('ttl_seconds'),
            max_views=body.get('max_views'),
            now=current_time(event),
        )
    except ValidationError as e:
        logger.info('Invalid paste input. Responding with 400.', extra={'event': INVALID_INPUT, 'details': e.errors})
        return response_400(e.errors)
    except BackendUnavailableError:
        logger.exception('Paste store unavailable. Responding with 500.', extra={'event': BACKEND_UNAVAILABLE})
        return response_500('Failed to create paste')

    # 3- Respond with the paste id and its shareable URL
    logger.info('Paste created. Responding with 201.', extra={'pasteId': created.id, 'event': PASTE_CREATED})
    return response_201(
        {
            'id': created.id,
            'url': get_share_url(created.id, event),
            'created_at': _isoformat(created.created_at),
            'expires_at': _isoformat(created.expires_at),
        }
    )
