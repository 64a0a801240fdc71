# ==============================================================================
# CHAT ENDPOINTS - Shopping Assistant Routes
# ==============================================================================
# Message sending, local history, vendor history and session summaries
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from shoppy.api.dependencies import ChatServiceDep, CurrentUser
from shoppy.schemas.base import APIResponse
from shoppy.schemas.chat import (
    ChatMessageResponse,
    ChatSendRequest,
    ChatSendResponse,
    ChatSessionSummary,
    VendorHistoryResponse,
)

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post(
    "/send",
    response_model=APIResponse[ChatSendResponse],
    summary="Send message",
    description=(
        "Send a message to the shopping assistant. Product searches are "
        "answered from the store catalogue, everything else by the replica."
    ),
)
async def send_message(
    schema: ChatSendRequest,
    user: CurrentUser,
    service: ChatServiceDep,
) -> APIResponse[ChatSendResponse]:
    """Run one chat turn."""
    result = await service.send_message(
        user.id,
        schema.message,
        is_new_chat=schema.is_new_chat,
        session_id=schema.session_id,
        user_products=schema.user_products,
    )
    return APIResponse.ok(data=result)


@router.get(
    "/history",
    response_model=APIResponse[List[ChatMessageResponse]],
    summary="Chat history",
    description="Messages of one session, or of the ten most recent sessions.",
)
async def get_history(
    user: CurrentUser,
    service: ChatServiceDep,
    session_id: Optional[str] = Query(None, alias="sessionId"),
) -> APIResponse[List[ChatMessageResponse]]:
    messages = await service.get_history(user.id, session_id)
    return APIResponse.ok(data=messages)


@router.get(
    "/sensay-history",
    response_model=APIResponse[VendorHistoryResponse],
    summary="Replica chat history",
    description="Chat history as stored by the replica vendor.",
)
async def get_vendor_history(
    user: CurrentUser,
    service: ChatServiceDep,
) -> APIResponse[VendorHistoryResponse]:
    items = await service.get_vendor_history(user.id)
    return APIResponse.ok(data=VendorHistoryResponse(items=items))


@router.get(
    "/sessions",
    response_model=APIResponse[List[ChatSessionSummary]],
    summary="List chat sessions",
    description="Summaries of the user's twenty most recent sessions.",
)
async def list_sessions(
    user: CurrentUser,
    service: ChatServiceDep,
) -> APIResponse[List[ChatSessionSummary]]:
    sessions = await service.get_sessions(user.id)
    return APIResponse.ok(data=sessions)
