# ==============================================================================
# CHAT SCHEMAS - Assistant Conversations
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from shoppy.schemas.base import BaseSchema


class ChatSendRequest(BaseSchema):
    """Schema for sending a chat message."""

    message: Optional[str] = Field(
        None,
        max_length=10000,
        description="User message content",
    )
    is_new_chat: bool = Field(
        False,
        description="Force a new chat session",
    )
    session_id: Optional[str] = Field(
        None,
        description="Continue this session when it belongs to the user",
    )
    user_products: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="Products the client attached to the message",
    )


class ChatSendResponse(BaseSchema):
    """Result of one chat turn."""

    success: bool = True
    message: str = Field(
        ...,
        description="Assistant reply",
    )
    session_id: str
    timestamp: datetime
    is_new_session: bool = False
    shopify_products: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="Storefront products attached to the reply",
    )


class ChatMessageResponse(BaseSchema):
    """Schema for a stored chat message."""

    id: str
    role: str = Field(
        ...,
        description="Message sender (user/assistant)",
    )
    content: str
    timestamp: datetime
    products: Optional[Any] = None
    shopify_products: Optional[Any] = None


class ChatSessionSummary(BaseSchema):
    """Sidebar entry for a chat session."""

    id: str
    title: str
    last_message: str
    timestamp: datetime
    message_count: int


class VendorHistoryResponse(BaseSchema):
    """Chat history as stored by the replica vendor."""

    success: bool = True
    type: str = "chat_history"
    items: List[Any] = Field(default_factory=list)
