import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from astro_positions.services.query_router import QueryRouter

logger = logging.getLogger(__name__)

router = APIRouter()


# ─────────────────────────────────────────────
# Request / Response Schemas
# ─────────────────────────────────────────────

class ChatRequest(BaseModel):
    message: Optional[Any] = Field(None, examples=["What about my career?"])
    chart: Optional[Any] = Field(None, description="A chart returned by /positions")


class ChatResponse(BaseModel):
    reply: str


def _is_blank(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)):
        return value == 0
    return False


# ─────────────────────────────────────────────
# Routes
# ─────────────────────────────────────────────

@router.post(
    "/chat",
    response_model=ChatResponse,
    summary="Short canned reading for a chart",
)
def chat(payload: ChatRequest) -> ChatResponse:
    """
    Reply = chart summary + the guidance of the first topic the message
    mentions (career, love, purpose, health), or a generic prompt.
    """
    if _is_blank(payload.message) or _is_blank(payload.chart):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide { message, chart } in JSON body.",
        )

    try:
        reply = QueryRouter().compose(payload.message, payload.chart)
    except Exception:
        logger.exception("Chat reply failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
    return ChatResponse(reply=reply)


@router.api_route(
    "/chat",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def chat_wrong_method() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Use POST"},
        headers={"Allow": "POST"},
    )
