import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from attendance_engine.api.v1.api import api_router
from attendance_engine.core.config import settings
from attendance_engine.core.logging import configure_logging
from attendance_engine.schemas.envelope import Envelope

configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Render malformed requests in the same envelope as every other failure."""
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    body = Envelope(
        success=False,
        error="Invalid request",
        error_kind="ValidationError",
        detail="; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        ),
    )
    return JSONResponse(
        status_code=422,
        content=body.model_dump(exclude_none=True),
    )


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(api_router, prefix=settings.API_V1_STR)
