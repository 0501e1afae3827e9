"""Chat endpoint."""

import logging

from fastapi import APIRouter, Depends

from .....core.services import ChatService
from ..deps import get_chat_service
from ..models import ChatReply, ChatRequest, ErrorResponse, ReplyBody

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={
        400: {"model": ErrorResponse, "description": "Empty message"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
def chat(request: ChatRequest, service: ChatService = Depends(get_chat_service)) -> ChatReply:
    """Answer one chat turn in the persona's voice.

    Retrieval and generation failures never surface here: the reply falls
    back to a friendly retry message instead.
    """
    result = service.answer(request.message)
    return ChatReply(
        response=ReplyBody(text=result.text, content=result.text),
        guide=result.guide,
    )
