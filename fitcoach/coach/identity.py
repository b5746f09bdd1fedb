"""Caller verification against Supabase Auth.

The proxy only needs "bearer token -> user id", so it calls the auth REST
endpoint directly instead of building a full Supabase client.
"""

import httpx
from loguru import logger

from fitcoach.coach.errors import InvalidTokenError
from fitcoach.coach.schemas import AuthenticatedCaller

USER_ENDPOINT = "/auth/v1/user"
BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str) -> str:
    """Strip the ``Bearer `` prefix from an Authorization header value."""
    if authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :]
    return authorization


class IdentityClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        supabase_url: str,
        service_role_key: str,
        auth_error_status: int = 401,
    ):
        self._http = http
        self._user_url = f"{supabase_url.rstrip('/')}{USER_ENDPOINT}"
        self._service_role_key = service_role_key
        self._auth_error_status = auth_error_status

    async def verify_token(self, token: str) -> AuthenticatedCaller:
        """Resolve a session token to the user it belongs to.

        Args:
            token: Session access token issued by Supabase Auth

        Returns:
            The authenticated caller

        Raises:
            InvalidTokenError: If the token is empty, rejected, or cannot be checked
        """
        if not token:
            logger.warning("Auth failed: empty bearer token")
            raise InvalidTokenError(self._auth_error_status)

        try:
            resp = await self._http.get(
                self._user_url,
                headers={
                    "apikey": self._service_role_key,
                    "Authorization": f"{BEARER_PREFIX}{token}",
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Auth failed: identity provider unreachable: {e}")
            raise InvalidTokenError(self._auth_error_status) from e

        if resp.status_code != httpx.codes.OK:
            logger.warning(f"Auth failed: identity provider returned {resp.status_code}")
            raise InvalidTokenError(self._auth_error_status)

        try:
            payload = resp.json()
        except ValueError as e:
            logger.error("Auth failed: identity provider returned a non-JSON body")
            raise InvalidTokenError(self._auth_error_status) from e

        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not user_id:
            logger.warning("Auth failed: identity provider response has no user id")
            raise InvalidTokenError(self._auth_error_status)

        return AuthenticatedCaller(user_id=str(user_id), email=payload.get("email"))
