import logging
from datetime import datetime, UTC

from ephemeralpaste.types import LambdaContext, LambdaEvent, LambdaResponse
from ephemeralpaste.utils import guarantee_500_response
from ephemeralpaste.lambdas.responses import response_200, response_503
from ephemeralpaste.lambdas.service_provider import get_service


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Report whether the paste store answers

    HTTP responses:
        200: {"ok": true, "timestamp": ..., "backend": "redis" | "memory"}
        503: {"ok": false, "timestamp": ..., "backend": "redis"}
    """
    service = get_service()
    ok = service.healthcheck()
    body = {
        'ok': ok,
        'timestamp': datetime.now(UTC).isoformat(),
        'backend': service.dao.backend.value,
    }

    if not ok:
        logger.warning('Paste store healthcheck failed. Responding with 503.', extra={'backend': body['backend']})
        return response_503(body)
    return response_200(body)
