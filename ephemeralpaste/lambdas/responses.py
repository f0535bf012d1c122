import json
from typing import Any

from ephemeralpaste.types import LambdaResponse


def _response(status_code: int, body: dict[str, Any]) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body),
    }


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return _response(200, body)


def response_201(body: dict[str, Any]) -> LambdaResponse:
    return _response(201, body)


def response_400(details: list[str]) -> LambdaResponse:
    return _response(400, {'error': 'Invalid input', 'details': details})


def response_404() -> LambdaResponse:
    return _response(404, {'error': 'Paste not found'})


def response_500(message: str | None = None) -> LambdaResponse:
    return _response(500, {'error': message or 'Internal server error'})


def response_503(body: dict[str, Any] | None = None) -> LambdaResponse:
    return _response(503, body or {'error': 'Service unavailable'})
