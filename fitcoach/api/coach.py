"""HTTP surface of the coach proxy.

The function answers on every path so it can be mounted anywhere
(e.g. behind ``/functions/v1/ai-fitness-coach``). Every response, including
errors, carries the CORS headers the browser client needs.
"""

import httpx
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from fitcoach.api.dependencies.settings import get_app_settings
from fitcoach.coach.errors import CoachProxyError, InvalidRequestError
from fitcoach.coach.proxy import CoachProxy
from fitcoach.coach.schemas import CoachRequest, CoachResponse, ErrorResponse
from fitcoach.config.settings import Settings

router = APIRouter(tags=["coach"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=CORS_HEADERS,
    )


def _describe_validation_error(e: ValidationError) -> str:
    first = e.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "body"
    return f"{location}: {first['msg']}"


async def _parse_request(request: Request) -> CoachRequest:
    try:
        payload = await request.json()
    except ValueError as e:
        raise InvalidRequestError("Invalid request body: expected JSON") from e

    try:
        return CoachRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid request body: {_describe_validation_error(e)}") from e


@router.options("/{path:path}")
async def coach_preflight(path: str) -> Response:
    """Handle CORS preflight requests.

    Answered before any body parsing or authentication.
    """
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(
    "/{path:path}",
    response_model=CoachResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def coach_chat(
    request: Request,
    path: str,
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """Forward a coaching message to the AI gateway and relay the answer."""
    try:
        coach_request = await _parse_request(request)
        async with httpx.AsyncClient(timeout=settings.gateway_timeout) as http:
            reply = await CoachProxy(settings, http).handle(coach_request, request.headers.get("Authorization"))
    except CoachProxyError as e:
        logger.warning(f"Coach request failed on /{path}: {e.status_code} {e.message}")
        return _error_response(e.message, e.status_code)
    except Exception as e:
        logger.exception(f"Error in coach proxy on /{path}: {e}")
        return _error_response(str(e) or "Unknown error", 500)

    return JSONResponse(content=CoachResponse(response=reply).model_dump(), headers=CORS_HEADERS)
