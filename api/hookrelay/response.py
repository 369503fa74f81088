"""Map a DispatchResult onto the caller's response protocol."""

import json
from typing import Any

from fastapi import Response
from fastapi.responses import JSONResponse

from hookrelay.relay import DispatchResult

MESSAGE_ID_HEADER = "X-Message-Sid"


def error_body(message: str) -> dict:
    return {"error": message}


def error_response(message: str, status_code: int = 500, **kwargs) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(message), **kwargs)


def relay_response(result: DispatchResult) -> Response:
    """204 with no body on success, 500 with ``{"error": ...}`` on failure."""
    if not result.succeeded:
        return error_response(result.error_message)

    headers = {MESSAGE_ID_HEADER: result.identifier} if result.identifier else None
    return Response(status_code=204, headers=headers)


def function_response(result: DispatchResult) -> dict[str, Any]:
    """The same contract in serverless ``{"statusCode": ...}`` form."""
    if not result.succeeded:
        return function_error(result.error_message)

    response: dict[str, Any] = {"statusCode": 204}
    if result.identifier:
        response["headers"] = {MESSAGE_ID_HEADER: result.identifier}
    return response


def function_error(message: str, status_code: int = 500) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(error_body(message)),
    }
