"""FastAPI application entrypoint."""

import logging

from fastapi import FastAPI

from api_common.api.identity import router as identity_router
from api_common.core.config import get_settings
from api_common.core.errors import register_error_handlers
from api_common.core.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logging.getLogger(__name__).info("Starting with settings=%s", settings.safe_for_logging())

app = FastAPI(title="API Common")
register_error_handlers(app)
app.include_router(identity_router)


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint for service readiness."""
    return {"status": "ok"}
