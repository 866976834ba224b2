import logging

from fastapi import FastAPI
from fastapi import Request as FastAPIRequest
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from artistshield.api import api_router
from artistshield.core.config import ConfigurationError, get_settings
from artistshield.core.rate_limit import limiter, rate_limit_exceeded_handler
from artistshield.schemas.common import ErrorResponse
from artistshield.services.mailer import MailerError
from artistshield.services.split_sheet import SplitSheetValidationError

settings = get_settings()

# Module loggers (sources, resolver, mailer) emit INFO diagnostics
logging.getLogger("artistshield").setLevel(logging.INFO)

# Explicit CORS methods for non-wildcard origins, must include every HTTP method used by the API
CORS_ALLOW_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]

app = FastAPI(
    title="Artist Shield API",
    description="IPI lookup across performing rights repertories, plus split sheets",
    version="0.1.0",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    openapi_url=None if settings.is_production else "/openapi.json",
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

logger = logging.getLogger(__name__)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    request: FastAPIRequest, exc: ConfigurationError
) -> JSONResponse:
    logger.error("%s (%s %s)", exc, request.method, request.url.path)
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


@app.exception_handler(SplitSheetValidationError)
async def split_sheet_validation_handler(
    request: FastAPIRequest, exc: SplitSheetValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=str(exc)).model_dump())


@app.exception_handler(MailerError)
async def mailer_error_handler(request: FastAPIRequest, exc: MailerError) -> JSONResponse:
    logger.error("Email delivery failed: %s", exc)
    return JSONResponse(status_code=502, content=ErrorResponse(error=str(exc)).model_dump())


@app.exception_handler(Exception)
async def global_exception_handler(request: FastAPIRequest, exc: Exception) -> JSONResponse:
    """Catch unhandled exceptions and return a generic 500 response."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    content = {"detail": "Internal server error"}
    if not settings.is_production:
        content["debug"] = str(exc)
    return JSONResponse(status_code=500, content=content)


# CORS
if settings.cors_origins.strip() == "*":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    origins = [origin.strip() for origin in settings.cors_origins.split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=["Authorization", "Content-Type"],
    )

app.include_router(api_router, prefix="/api")


@app.get("/health")
def health_check():
    return {"status": "ok"}
