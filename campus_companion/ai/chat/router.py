"""FastAPI router for the campus chat endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from campus_companion.ai.chat.config import ChatSettings
from campus_companion.ai.chat.constants import APOLOGY_MESSAGE
from campus_companion.ai.chat.dependencies import (
    ResponderFactory,
    get_chat_responder_factory,
    get_chat_settings_dependency,
)
from campus_companion.ai.chat.schemas import ChatRequest, ChatResponse
from campus_companion.auth.dependencies import get_current_claims
from campus_companion.auth.schemas import Claims
from campus_companion.constants import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS
from campus_companion.utils.logger import logger

router = APIRouter(prefix="/chat", tags=["Chat"])


def apology_response(headers: dict[str, str] | None = None) -> JSONResponse:
    """The fixed answer returned for any failure after validation."""
    body = ChatResponse(message=APOLOGY_MESSAGE, suggested_links=[])
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(by_alias=True),
        headers=headers,
    )


@router.options("", include_in_schema=False)
async def chat_options() -> PlainTextResponse:
    """Answer bare OPTIONS probes; real preflights are handled by CORSMiddleware."""
    return PlainTextResponse(
        "ok",
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
            "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
        },
    )


@router.post("", response_model=ChatResponse)
async def answer_chat(
    request: Request,
    claims: Annotated[Claims, Depends(get_current_claims)],
    settings: Annotated[ChatSettings, Depends(get_chat_settings_dependency)],
    responder_factory: Annotated[ResponderFactory, Depends(get_chat_responder_factory)],
) -> ChatResponse | JSONResponse:
    """
    Answer a student's question about campus resources, events and clubs.

    Args:
        request: The HTTP request carrying {"message": str}
        claims: Verified caller claims
        settings: Chat settings
        responder_factory: Builds the configured chat responder

    Returns:
        ChatResponse: The answer, or a 500 apology if anything fails

    Raises:
        BadRequestError: If the message is missing, blank or too long
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    chat_request = ChatRequest.from_payload(payload, settings.message_max_length)
    logger.info(
        "Chat request from user",
        user_id=claims.sub,
        message_length=len(chat_request.message),
    )

    try:
        responder = responder_factory()
        return await responder.answer(chat_request.trimmed_message, user_id=claims.sub)
    except Exception as e:
        logger.exception(
            "Chat error", user_id=claims.sub, error_type=type(e).__name__
        )
        return apology_response()
