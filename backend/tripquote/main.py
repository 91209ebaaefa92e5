"""FastAPI application entrypoint."""

import logging

from asgi_correlation_id import CorrelationIdFilter, CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripquote.api import api_router
from tripquote.core.config import get_settings
from tripquote.security.logging_filters import QuoteLogFilter

settings = get_settings()

_ALLOWED_ORIGINS = [origin for origin in settings.cors_allow_origins if origin]
if not _ALLOWED_ORIGINS:
    _ALLOWED_ORIGINS = ["http://localhost:5173"]

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"

_package_logger = logging.getLogger("tripquote")
_package_logger.setLevel(settings.log_level.upper())
if not any(
    any(isinstance(flt, QuoteLogFilter) for flt in handler.filters)
    for handler in _package_logger.handlers
):
    # Handler filters also see records from child loggers; logger filters do not.
    _handler = logging.StreamHandler()
    _handler.addFilter(CorrelationIdFilter(uuid_length=32, default_value="-"))
    _handler.addFilter(QuoteLogFilter())
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    _package_logger.addHandler(_handler)
    _package_logger.propagate = False

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")


for _logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error", ""):
    _logger = logging.getLogger(_logger_name)
    if not any(isinstance(flt, QuoteLogFilter) for flt in _logger.filters):
        _logger.addFilter(QuoteLogFilter())

app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Return a simple welcome message."""
    return {"message": settings.app_name}
