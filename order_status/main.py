import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from order_status.config import settings
from order_status.errors import InvalidTransitionError
from order_status.metrics import get_metrics_bytes, get_metrics_content_type
from order_status.routes import admin, transitions
from order_status.validator import get_validator, reset_validator

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(message)s",
    stream=sys.stdout,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load the table at startup so a bad TRANSITION_TABLE_PATH fails fast
    get_validator()
    yield
    reset_validator()


app = FastAPI(title="Order Status Validator", lifespan=lifespan)
app.include_router(transitions.router)
app.include_router(admin.router)


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError) -> JSONResponse:
    """The only place the transition error becomes an HTTP status."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "invalid_transition",
            "message": str(exc),
            "current_status": exc.current_status.value,
            "requested_status": exc.requested_status.value,
        },
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.get("/metrics")
async def metrics() -> Response:
    return Response(
        content=get_metrics_bytes(),
        media_type=get_metrics_content_type(),
    )
