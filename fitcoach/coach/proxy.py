"""Coach proxy: one client request in, one gateway call out.

Order per request: configuration check, caller authentication, prompt
construction, upstream call. A request that fails a step never reaches the
next one.
"""

import httpx
from loguru import logger

from fitcoach.coach.errors import ConfigurationError, MissingAuthorizationError
from fitcoach.coach.gateway import GatewayClient
from fitcoach.coach.identity import IdentityClient, extract_bearer_token
from fitcoach.coach.prompts import build_messages, build_system_prompt, resolve_coach_type
from fitcoach.coach.schemas import CoachRequest
from fitcoach.config.settings import Settings


def _require_configuration(settings: Settings) -> None:
    if not settings.gateway_api_key:
        raise ConfigurationError("LOVABLE_API_KEY not configured")
    if not settings.supabase_url:
        raise ConfigurationError("SUPABASE_URL not configured")
    if not settings.supabase_service_role_key:
        raise ConfigurationError("SUPABASE_SERVICE_ROLE_KEY not configured")


class CoachProxy:
    def __init__(self, settings: Settings, http: httpx.AsyncClient):
        self._settings = settings
        self._identity = IdentityClient(
            http,
            settings.supabase_url,
            settings.supabase_service_role_key,
            auth_error_status=settings.auth_error_status,
        )
        self._gateway = GatewayClient(
            http,
            settings.gateway_url,
            settings.gateway_api_key,
            settings.gateway_model,
        )

    async def handle(self, request: CoachRequest, authorization: str | None) -> str:
        """Answer one coach request.

        Args:
            request: Parsed coach request
            authorization: Raw Authorization header value, if any

        Returns:
            Coaching text produced by the gateway

        Raises:
            CoachProxyError: Mapped to the response status by the route
        """
        _require_configuration(self._settings)

        if not authorization:
            logger.warning("Coach request rejected: no Authorization header")
            raise MissingAuthorizationError(self._settings.auth_error_status)

        caller = await self._identity.verify_token(extract_bearer_token(authorization))
        logger.debug(f"Coach request authenticated: user_id={caller.user_id}")

        coach_type = resolve_coach_type(request.type)
        system_prompt = build_system_prompt(coach_type, request.user_context)

        logger.info(f"Making AI request with type: {coach_type} (requested: {request.type!r})")
        reply = await self._gateway.complete(build_messages(system_prompt, request.message))
        logger.info("AI response received successfully")
        return reply
