# ==============================================================================
# CHAT MODELS - Assistant Conversations
# ==============================================================================
# Chat sessions and the messages exchanged with the shopping replica
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shoppy.domain_models.base import SQLBase, TimestampMixin
from shoppy.utils.helpers import utc_now

if TYPE_CHECKING:
    from shoppy.domain_models.user import User


class ChatSession(SQLBase, TimestampMixin):
    """
    Conversation thread between a user and the assistant.

    ``updated_at`` is bumped on every exchange; the most recently touched
    session is the default target for messages sent without a session id.

    Relationships:
        user: Session owner
        messages: Messages in this session
    """

    __tablename__ = "chat_sessions"

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="chat_sessions",
    )
    messages: Mapped[List["ChatMessage"]] = relationship(
        "ChatMessage",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="ChatMessage.timestamp",
    )

    def __repr__(self) -> str:
        return f"<ChatSession(id={self.id}, user_id={self.user_id})>"


class ChatMessage(SQLBase):
    """
    Single message within a chat session.

    Attributes:
        session_id: Parent chat session
        role: "user" or "assistant"
        content: Message text
        timestamp: When the message was stored
        products: Products the client attached to a user message
        sensay_response: Raw replica payload behind an assistant message
        shopify_products: Storefront search results shown with the reply
    """

    __tablename__ = "chat_messages"

    session_id: Mapped[str] = mapped_column(
        ForeignKey("chat_sessions.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        index=True,
        nullable=False,
    )

    # Product payloads
    products: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )
    sensay_response: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )
    shopify_products: Mapped[Optional[Any]] = mapped_column(
        JSON,
        nullable=True,
    )

    # Relationships
    session: Mapped["ChatSession"] = relationship(
        "ChatSession",
        back_populates="messages",
    )

    def __repr__(self) -> str:
        return f"<ChatMessage(id={self.id}, role={self.role})>"
