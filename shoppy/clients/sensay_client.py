# ==============================================================================
# SENSAY CLIENT - Replica Chat REST API
# ==============================================================================
# Users, chat completions and chat history for the shopping replica
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from shoppy.core.settings import settings
from shoppy.core.exceptions import SensayAPIError
from shoppy.clients.base_client import HTTPClientPool

logger = logging.getLogger(__name__)


class SensayClient:
    """
    Async client for the Sensay replica API.

    Every request carries the organization secret and API version
    headers; per-user calls add ``X-USER-ID``.

    Only ``chat_completion`` retries. It backs off exponentially
    (``retry_base_delay * 2**attempt`` seconds) on timeouts and
    connection failures, never on an HTTP error response.

    Example:
        >>> client = SensayClient()
        >>> reply = await client.chat_completion(replica_uuid, "customer_1", "Hi!")
        >>> reply["content"]
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_base_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout if timeout is not None else settings.SENSAY_TIMEOUT
        self._max_retries = (
            max_retries if max_retries is not None else settings.SENSAY_MAX_RETRIES
        )
        self._retry_base_delay = retry_base_delay

        headers = {
            "X-ORGANIZATION-SECRET": api_key if api_key is not None else settings.SENSAY_API_KEY,
            "X-API-Version": api_version or settings.SENSAY_API_VERSION,
            "Content-Type": "application/json",
        }
        self._pool = HTTPClientPool(
            base_url=base_url or settings.SENSAY_BASE_URL,
            headers=headers,
            timeout=self._timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._pool.close()

    # ==========================================================================
    # INTERNAL HELPERS
    # ==========================================================================

    @staticmethod
    def _user_headers(user_id: Optional[str]) -> Optional[Dict[str, str]]:
        return {"X-USER-ID": user_id} if user_id else None

    @staticmethod
    def _parse(response: httpx.Response, action: str) -> Dict[str, Any]:
        """
        Decode a Sensay response, raising on non-2xx status.

        Raises:
            SensayAPIError: With the vendor ``error`` text and the status
        """
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if not response.is_success:
            detail = None
            if isinstance(payload, dict):
                detail = payload.get("error")
            detail = detail or response.reason_phrase or f"HTTP {response.status_code}"
            raise SensayAPIError(
                message=f"Error {action}: {detail}",
                upstream_status=response.status_code,
            )

        return payload if isinstance(payload, dict) else {"items": payload}

    async def _request(
        self,
        method: str,
        path: str,
        action: str,
        user_id: Optional[str] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """Single request without retries."""
        client = await self._pool.get_client()
        try:
            response = await client.request(
                method,
                path,
                headers=self._user_headers(user_id),
                **kwargs,
            )
        except httpx.TimeoutException as e:
            raise SensayAPIError(f"Error {action}: request timed out", reason="timeout") from e
        except httpx.TransportError as e:
            raise SensayAPIError(f"Error {action}: {e}", reason="connection") from e

        return self._parse(response, action)

    # ==========================================================================
    # USERS
    # ==========================================================================

    async def create_user(self, user_id: str) -> Dict[str, Any]:
        """
        Register a vendor user.

        Returns:
            Vendor user object (includes ``id``)
        """
        result = await self._request(
            "POST",
            "/users",
            "creating user",
            json={"id": user_id},
        )
        logger.info(f"Sensay user created: {result.get('id', user_id)}")
        return result

    # ==========================================================================
    # CHAT
    # ==========================================================================

    async def chat_completion(
        self,
        replica_uuid: str,
        user_id: str,
        content: str,
    ) -> Dict[str, Any]:
        """
        Ask the replica for a reply.

        Makes at most ``1 + max_retries`` attempts.

        Returns:
            Vendor payload; the reply text is under ``content``

        Raises:
            SensayAPIError: On an error response (not retried) or once
                the retries are exhausted (``reason`` is "timeout" or
                "connection")
        """
        client = await self._pool.get_client()
        path = f"/replicas/{replica_uuid}/chat/completions"
        last_error: Optional[SensayAPIError] = None
        last_cause: Optional[Exception] = None

        for attempt in range(self._max_retries + 1):
            logger.info(
                f"Sensay chat request (attempt {attempt + 1}/{self._max_retries + 1})"
            )
            try:
                response = await client.post(
                    path,
                    json={"content": content},
                    headers=self._user_headers(user_id),
                    timeout=self._timeout,
                )
                return self._parse(response, "in chat")

            except httpx.TimeoutException as e:
                last_error = SensayAPIError(
                    f"Error in chat: timed out after {self._timeout}s",
                    reason="timeout",
                )
                last_cause = e
            except httpx.TransportError as e:
                last_error = SensayAPIError(
                    f"Error in chat: {e}",
                    reason="connection",
                )
                last_cause = e

            logger.warning(f"Sensay chat attempt {attempt + 1} failed: {last_error.message}")
            if attempt < self._max_retries:
                delay = self._retry_base_delay * (2 ** attempt)
                logger.info(f"Retrying Sensay chat in {delay}s")
                await asyncio.sleep(delay)

        raise last_error from last_cause

    async def get_chat_history(
        self,
        replica_uuid: str,
        user_id: str,
    ) -> Dict[str, Any]:
        """Fetch the replica's stored history for ``user_id``."""
        return await self._request(
            "GET",
            f"/replicas/{replica_uuid}/chat/history",
            "fetching chat history",
            user_id=user_id,
        )

    async def get_conversations(
        self,
        replica_uuid: str,
        user_id: str,
        page: int = 1,
        page_size: int = 24,
        sort_by: str = "lastReplicaReplyAt",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        """List the replica's conversations, newest reply first by default."""
        return await self._request(
            "GET",
            f"/replicas/{replica_uuid}/conversations",
            "fetching conversations",
            user_id=user_id,
            params={
                "page": page,
                "pageSize": page_size,
                "sortBy": sort_by,
                "sortOrder": sort_order,
            },
        )
