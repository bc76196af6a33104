from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from order_status.order_state import OrderStatus, status_change_note
from order_status.validator import OrderStatusValidator, get_validator

router = APIRouter(prefix="/transitions", tags=["transitions"])


class TransitionRequestBody(BaseModel):
    current_status: OrderStatus = Field(..., description="Status the order is in now")
    requested_status: OrderStatus = Field(..., description="Status the caller wants to move the order to")


@router.get("")
async def list_transitions(validator: OrderStatusValidator = Depends(get_validator)) -> dict:
    table = validator.table
    return {
        "transitions": table.as_dict(),
        "terminal": [s.value for s in table.terminal_statuses],
        "allow_same_status": validator.allow_same_status,
    }


@router.get("/{status}")
async def next_statuses(
    status: OrderStatus,
    validator: OrderStatusValidator = Depends(get_validator),
) -> dict:
    allowed = validator.next_statuses(status)
    return {
        "status": status.value,
        "next": [s.value for s in OrderStatus if s in allowed],
        "terminal": validator.is_terminal(status),
    }


@router.post("/validate")
async def validate_transition(
    body: TransitionRequestBody,
    validator: OrderStatusValidator = Depends(get_validator),
) -> JSONResponse:
    """
    Check one status change. Allowed -> 200 with a history note.
    Not allowed -> InvalidTransitionError, mapped to 400 by the app's exception handler.
    """
    validator.validate_transition(body.current_status, body.requested_status)
    return JSONResponse(
        status_code=200,
        content={
            "status": "ok",
            "current_status": body.current_status.value,
            "requested_status": body.requested_status.value,
            "note": status_change_note(body.current_status, body.requested_status),
        },
    )
