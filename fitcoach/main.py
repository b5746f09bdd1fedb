from fastapi import FastAPI, Request
from loguru import logger

from fitcoach.api.coach import router as coach_router
from fitcoach.config.settings import Settings, get_settings
from fitcoach.core.logger import setup_logger


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the coach proxy application.

    Settings are resolved once here and reach the handlers through
    ``app.state``; request handling never reads the environment.
    """
    if settings is None:
        settings = get_settings()

    setup_logger(
        level=settings.log_level,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

    app = FastAPI(title="FitCoach AI Proxy")
    app.state.settings = settings

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests."""
        logger.debug(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
        return response

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # Catch-all coach routes must come after every fixed route
    app.include_router(coach_router)

    logger.info(f"FastAPI application initialized (model={settings.gateway_model})")
    return app


app = create_app()
