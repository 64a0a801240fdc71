# ==============================================================================
# CHAT SERVICE - Shopping Assistant Orchestration
# ==============================================================================
# Intent detection, storefront enrichment, replica replies and sessions
# ==============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from shoppy.core.settings import settings
from shoppy.core.constants import (
    ChatFailureMessages,
    DatabaseConstants,
    ErrorMessages,
    MessageRoles,
    QueryLimits,
    UsageEndpoints,
)
from shoppy.core.exceptions import (
    BadRequestError,
    NotFoundError,
    SensayAPIError,
    ShopifyAPIError,
)
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.schemas.chat import (
    ChatMessageResponse,
    ChatSendResponse,
    ChatSessionSummary,
)
from shoppy.services.base_service import BaseService
from shoppy.services.catalog import product_price
from shoppy.services.intent import detect_product_search, mentioned_product_type
from shoppy.services.usage_service import UsageService
from shoppy.utils.helpers import truncate, utc_now, vendor_user_id

if TYPE_CHECKING:
    from shoppy.clients.sensay_client import SensayClient
    from shoppy.clients.shopify_client import ShopifyClient

logger = logging.getLogger(__name__)

SEARCH_UNAVAILABLE_NOTE = (
    "\n\n[SYSTEM: Shopify search temporarily unavailable, provide general assistance]"
)

PRODUCTS_FOUND_REPLY = """Perfect! Based on what you're looking for, here are the {keyword} we have in our store:

{product_list}

These options match your requirements! Would you like to:
• See more details about any specific product?
• Add any of these to your cart?
• Get recommendations for accessories?

I'm here to help you make the perfect choice! 🛍️✨"""

NO_PRODUCTS_REPLY = """I apologize, but we don't currently have any {keyword} matching your specific requirements in our store inventory. 

Our {keyword} collection is temporarily out of stock or we may not carry that particular style yet.

Would you like me to:
• Check for similar alternatives in our current collection?
• Show you other popular items we have available?
• Let you know when we restock this category?

I'm here to help you find something great from what we currently have! 🛍️"""


def products_found_reply(message: str, products: List[Dict[str, Any]]) -> str:
    """Assistant reply listing storefront matches."""
    product_list = "\n".join(
        f"{index}. **{product.get('title', '')}** - {product_price(product)}"
        for index, product in enumerate(products, start=1)
    )
    return PRODUCTS_FOUND_REPLY.format(
        keyword=mentioned_product_type(message, "products"),
        product_list=product_list,
    )


def no_products_reply(message: str) -> str:
    """Assistant reply when the storefront has no match."""
    return NO_PRODUCTS_REPLY.format(keyword=mentioned_product_type(message, "item"))


def friendly_failure_message(error: SensayAPIError) -> str:
    """User-facing text for a failed replica call."""
    if error.reason == "timeout":
        return ChatFailureMessages.TIMEOUT
    if error.reason == "connection":
        return ChatFailureMessages.CONNECTION
    if error.upstream_status == 401:
        return ChatFailureMessages.UNAUTHORIZED
    if error.upstream_status == 429:
        return ChatFailureMessages.RATE_LIMITED
    return ChatFailureMessages.DEFAULT


class ChatService(BaseService[ChatMessageResponse]):
    """
    Chat service for the shopping assistant.

    One call to ``send_message`` performs a full turn:
        1. Link the user to a replica-vendor user (created on first use)
        2. Classify the message as product search or general chat
        3. Build the reply from storefront results or the replica
        4. Pick the chat session
        5. Store both messages and log the vendor call

    Vendor calls happen before any chat rows are written, so a failed
    turn leaves no half-saved conversation behind.
    """

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        sensay: "SensayClient",
        shopify: "ShopifyClient",
        usage: Optional[UsageService] = None,
        replica_uuid: Optional[str] = None,
    ) -> None:
        super().__init__(adapter, DatabaseConstants.CHAT_MESSAGES_COLLECTION)
        self._sensay = sensay
        self._shopify = shopify
        self._usage = usage or UsageService(adapter)
        self._replica_uuid = replica_uuid or settings.SENSAY_REPLICA_UUID

    def _to_response(self, entity: Any) -> ChatMessageResponse:
        return ChatMessageResponse.model_validate(entity.to_dict())

    # ==========================================================================
    # VENDOR USER
    # ==========================================================================

    async def get_or_create_vendor_user(self, user_id: str) -> str:
        """
        Return the user's replica-vendor id, creating it on first use.

        Raises:
            NotFoundError: If the local user does not exist
            SensayAPIError: If the vendor rejects the new user
        """
        user = await self._adapter.get_by_id(DatabaseConstants.USERS_COLLECTION, user_id)
        if not user:
            raise NotFoundError(
                message=ErrorMessages.USER_NOT_FOUND,
                resource_type="user",
                resource_id=user_id,
            )

        if user.sensay_user_id:
            return user.sensay_user_id

        request_data = {"userId": user_id}
        logger.info(f"Creating Sensay user for {user.username}")
        try:
            vendor_user = await self._sensay.create_user(vendor_user_id(user_id))
        except SensayAPIError as e:
            await self._usage.record(
                user_id,
                UsageEndpoints.CREATE_USER,
                request_data,
                success=False,
                error_message=e.message,
            )
            raise

        sensay_user_id = vendor_user["id"]
        await self._adapter.update(
            DatabaseConstants.USERS_COLLECTION,
            user_id,
            {"sensay_user_id": sensay_user_id},
        )
        await self._usage.record(user_id, UsageEndpoints.CREATE_USER, request_data, vendor_user)
        return sensay_user_id

    # ==========================================================================
    # SEND MESSAGE
    # ==========================================================================

    async def send_message(
        self,
        user_id: str,
        message: Optional[str],
        is_new_chat: bool = False,
        session_id: Optional[str] = None,
        user_products: Optional[List[Dict[str, Any]]] = None,
    ) -> ChatSendResponse:
        """
        Handle one chat turn.

        Raises:
            BadRequestError: If the message is blank
            SensayAPIError: With a user-facing message when the replica fails
        """
        text = (message or "").strip()
        if not text:
            raise BadRequestError(ErrorMessages.MESSAGE_REQUIRED)

        request_data = {"message": text}
        try:
            vendor_id = await self.get_or_create_vendor_user(user_id)
            response, products = await self._generate_reply(vendor_id, text)
        except SensayAPIError as e:
            logger.error(f"Chat turn failed for user {user_id}: {e.message}")
            await self._usage.record(
                user_id,
                UsageEndpoints.CHAT,
                request_data,
                success=False,
                error_message=e.message,
            )
            raise SensayAPIError(
                message=friendly_failure_message(e),
                upstream_status=e.upstream_status,
                reason=e.reason,
            ) from e

        session = await self._resolve_session(user_id, is_new_chat, session_id)
        content = response.get("content") or ""

        await self._adapter.create(
            DatabaseConstants.CHAT_MESSAGES_COLLECTION,
            {
                "session_id": session.id,
                "role": MessageRoles.USER,
                "content": text,
                "products": user_products or None,
            },
        )
        await self._adapter.create(
            DatabaseConstants.CHAT_MESSAGES_COLLECTION,
            {
                "session_id": session.id,
                "role": MessageRoles.ASSISTANT,
                "content": content,
                "sensay_response": response,
                "shopify_products": products or None,
            },
        )
        await self._adapter.update(
            DatabaseConstants.CHAT_SESSIONS_COLLECTION,
            session.id,
            {"updated_at": utc_now()},
        )
        await self._usage.record(user_id, UsageEndpoints.CHAT, request_data, response)

        return ChatSendResponse(
            message=content,
            session_id=session.id,
            timestamp=utc_now(),
            is_new_session=is_new_chat,
            shopify_products=products or None,
        )

    async def _generate_reply(
        self,
        vendor_id: str,
        text: str,
    ) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
        """Return the reply payload and any storefront products shown."""
        if not detect_product_search(text):
            logger.info("Sending message to replica")
            reply = await self._sensay.chat_completion(self._replica_uuid, vendor_id, text)
            return reply, []

        logger.info(f"Detected product search intent: {text!r}")
        try:
            products = await self._shopify.search_products(text, QueryLimits.SEARCH_RESULTS)
        except ShopifyAPIError as e:
            logger.error(f"Storefront search failed, falling back to replica: {e.message}")
            reply = await self._sensay.chat_completion(
                self._replica_uuid,
                vendor_id,
                f"{text}{SEARCH_UNAVAILABLE_NOTE}",
            )
            return reply, []

        if products:
            logger.info(f"Found {len(products)} products for search")
            return {"content": products_found_reply(text, products)}, products

        logger.info("No products found for search")
        return {"content": no_products_reply(text)}, []

    async def _resolve_session(
        self,
        user_id: str,
        is_new_chat: bool,
        session_id: Optional[str],
    ) -> Any:
        """Pick the session a turn belongs to, creating one when needed."""
        sessions = DatabaseConstants.CHAT_SESSIONS_COLLECTION

        if is_new_chat:
            session = await self._adapter.create(sessions, {"user_id": user_id})
            logger.info(f"Created new chat session: {session.id}")
            return session

        if session_id:
            session = await self._adapter.find_one(
                sessions,
                {"id": session_id, "user_id": user_id},
            )
            if session:
                return session
            session = await self._adapter.create(sessions, {"user_id": user_id})
            logger.info(f"Session not found, created new session: {session.id}")
            return session

        session = await self._adapter.find_one(
            sessions,
            {"user_id": user_id},
            sort_by="updated_at",
            sort_order="desc",
        )
        if session:
            return session
        return await self._adapter.create(sessions, {"user_id": user_id})

    # ==========================================================================
    # HISTORY
    # ==========================================================================

    async def get_history(
        self,
        user_id: str,
        session_id: Optional[str] = None,
    ) -> List[ChatMessageResponse]:
        """
        Messages of the most recent sessions, flattened.

        Sessions are newest first; messages within a session oldest first.
        """
        filters: Dict[str, Any] = {"user_id": user_id}
        if session_id:
            filters["id"] = session_id

        sessions = await self._adapter.get_all(
            DatabaseConstants.CHAT_SESSIONS_COLLECTION,
            limit=1 if session_id else QueryLimits.HISTORY_SESSIONS,
            filters=filters,
            sort_by="updated_at",
            sort_order="desc",
        )

        history: List[ChatMessageResponse] = []
        for session in sessions:
            messages = await self._adapter.get_all(
                self._collection_name,
                limit=QueryLimits.UNBOUNDED,
                filters={"session_id": session.id},
                sort_by="timestamp",
                sort_order="asc",
            )
            history.extend(self._to_response(message) for message in messages)
        return history

    async def get_sessions(self, user_id: str) -> List[ChatSessionSummary]:
        """Sidebar summaries of the user's recent sessions."""
        sessions = await self._adapter.get_all(
            DatabaseConstants.CHAT_SESSIONS_COLLECTION,
            limit=QueryLimits.SESSION_SUMMARIES,
            filters={"user_id": user_id},
            sort_by="updated_at",
            sort_order="desc",
        )

        summaries: List[ChatSessionSummary] = []
        for session in sessions:
            latest = await self._adapter.find_one(
                self._collection_name,
                {"session_id": session.id},
                sort_by="timestamp",
                sort_order="desc",
            )
            message_count = await self._adapter.count(
                self._collection_name,
                {"session_id": session.id},
            )
            content = latest.content if latest else None
            summaries.append(
                ChatSessionSummary(
                    id=session.id,
                    title=truncate(content or "Chat Session", QueryLimits.SESSION_TITLE_LENGTH),
                    last_message=content or "No messages",
                    timestamp=session.updated_at,
                    message_count=message_count,
                )
            )
        return summaries

    async def get_vendor_history(self, user_id: str) -> List[Any]:
        """Chat history items stored by the replica vendor."""
        vendor_id = await self.get_or_create_vendor_user(user_id)
        try:
            response = await self._sensay.get_chat_history(self._replica_uuid, vendor_id)
        except SensayAPIError as e:
            await self._usage.record(
                user_id,
                UsageEndpoints.CHAT_HISTORY,
                {},
                success=False,
                error_message=e.message,
            )
            raise

        await self._usage.record(user_id, UsageEndpoints.CHAT_HISTORY, {}, response)
        return response.get("items") or []
