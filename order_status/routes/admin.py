from fastapi import APIRouter
from fastapi.responses import JSONResponse

from order_status.errors import TransitionTableError
from order_status.validator import reload_validator

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/transitions/reload")
async def transitions_reload() -> JSONResponse:
    """
    Reload the transition table from TRANSITION_TABLE_PATH (or the built-in table if unset).
    A table that fails to load is reported and the current one keeps serving.
    """
    try:
        table = reload_validator()
    except TransitionTableError as e:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "detail": str(e)},
        )
    return JSONResponse(
        status_code=200,
        content={"status": "ok", "transitions": table.as_dict()},
    )
