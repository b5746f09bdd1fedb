from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_GATEWAY_MODEL = "google/gemini-2.5-flash"

# 500 keeps wire compatibility with clients that expect the legacy mapping
ALLOWED_AUTH_ERROR_STATUSES = {401, 500}


class Settings(BaseSettings):
    gateway_api_key: str = Field(default="", validation_alias="LOVABLE_API_KEY")
    gateway_url: str = Field(default=DEFAULT_GATEWAY_URL, validation_alias="AI_GATEWAY_URL")
    gateway_model: str = Field(default=DEFAULT_GATEWAY_MODEL, validation_alias="AI_GATEWAY_MODEL")
    gateway_timeout: float = Field(
        default=60.0,
        validation_alias="AI_GATEWAY_TIMEOUT",
        description="Seconds to wait for the identity and gateway round trips",
    )
    supabase_url: str = Field(default="", validation_alias="SUPABASE_URL")
    supabase_service_role_key: str = Field(default="", validation_alias="SUPABASE_SERVICE_ROLE_KEY")
    auth_error_status: int = Field(
        default=401,
        validation_alias="AUTH_ERROR_STATUS",
        description="HTTP status for missing or rejected credentials (401, or 500 for legacy clients)",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LOG_RETENTION")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("auth_error_status")
    @classmethod
    def validate_auth_error_status(cls, value: int) -> int:
        if value not in ALLOWED_AUTH_ERROR_STATUSES:
            raise ValueError(f"AUTH_ERROR_STATUS must be one of {sorted(ALLOWED_AUTH_ERROR_STATUSES)}, got {value}")
        return value

    @field_validator("gateway_timeout")
    @classmethod
    def validate_gateway_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("AI_GATEWAY_TIMEOUT must be positive")
        return value

    @field_validator("gateway_api_key")
    @classmethod
    def validate_gateway_api_key(cls, value: str) -> str:
        """Warn when the gateway key is missing.

        The app still starts so health checks and CORS preflights work;
        coach requests fail with a configuration error until the key is set.
        """
        if not value:
            logger.warning("⚠️ LOVABLE_API_KEY is not set. Coach requests will fail until it is configured.")
        return value

    @field_validator("supabase_url", "supabase_service_role_key")
    @classmethod
    def validate_supabase_credentials(cls, value: str) -> str:
        if not value:
            logger.warning(
                "⚠️ SUPABASE_URL and/or SUPABASE_SERVICE_ROLE_KEY are not set. "
                "Caller tokens cannot be verified until both are configured."
            )
        return value

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def get_settings() -> Settings:
    """Build settings from the environment and the optional .env file."""
    return Settings()
