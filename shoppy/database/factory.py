# ==============================================================================
# DATABASE FACTORY - Adapter Instantiation & Lifecycle Management
# ==============================================================================
# Single cached adapter shared by every service
# ==============================================================================

from __future__ import annotations

import logging
from typing import Dict, Optional

from shoppy.core.settings import settings
from shoppy.core.constants import DatabaseConstants
from shoppy.core.exceptions import DatabaseError
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.database.adapters.sqlalchemy_adapter import SQLAlchemyAdapter

logger = logging.getLogger(__name__)


class DatabaseFactory:
    """
    Factory class for creating and managing the database adapter.

    Adapters are cached per async database URL, so the application and
    the test-suite can point at different files without clashing.

    Class Attributes:
        _instances: Cache of initialized adapter instances

    Example:
        >>> await DatabaseFactory.initialize()
        >>> adapter = DatabaseFactory.get_adapter()
        >>> user = await adapter.get_by_id("users", user_id)
        >>> await DatabaseFactory.shutdown()
    """

    _instances: Dict[str, BaseDatabaseAdapter] = {}

    @classmethod
    def create_adapter(
        cls,
        database_url: Optional[str] = None,
    ) -> BaseDatabaseAdapter:
        """
        Create the adapter, or return the cached instance.

        Args:
            database_url: Async connection URL (defaults to settings)
        """
        url = database_url or settings.async_database_url

        if url in cls._instances:
            return cls._instances[url]

        adapter = SQLAlchemyAdapter(database_url=url)
        logger.info(f"Created database adapter ({url.split(':', 1)[0]})")

        cls._instances[url] = adapter
        return adapter

    @classmethod
    async def initialize(
        cls,
        database_url: Optional[str] = None,
    ) -> BaseDatabaseAdapter:
        """
        Initialize database connection.

        Should be called at application startup.

        Raises:
            DatabaseError: If connection fails
        """
        adapter = cls.create_adapter(database_url)

        try:
            await adapter.connect()
            cls._register_models(adapter)
            logger.info("Database initialized")
            return adapter
        except DatabaseError:
            raise
        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            raise DatabaseError(f"Failed to initialize database: {e}")

    @classmethod
    def _register_models(cls, adapter: BaseDatabaseAdapter) -> None:
        """Register all domain models with the adapter."""
        from shoppy.domain_models import (
            ApiUsage,
            Cart,
            CartItem,
            ChatMessage,
            ChatSession,
            Order,
            OrderItem,
            Payment,
            User,
        )

        adapter.register_model(DatabaseConstants.USERS_COLLECTION, User)
        adapter.register_model(DatabaseConstants.CHAT_SESSIONS_COLLECTION, ChatSession)
        adapter.register_model(DatabaseConstants.CHAT_MESSAGES_COLLECTION, ChatMessage)
        adapter.register_model(DatabaseConstants.CARTS_COLLECTION, Cart)
        adapter.register_model(DatabaseConstants.CART_ITEMS_COLLECTION, CartItem)
        adapter.register_model(DatabaseConstants.ORDERS_COLLECTION, Order)
        adapter.register_model(DatabaseConstants.ORDER_ITEMS_COLLECTION, OrderItem)
        adapter.register_model(DatabaseConstants.PAYMENTS_COLLECTION, Payment)
        adapter.register_model(DatabaseConstants.API_USAGE_COLLECTION, ApiUsage)

        logger.info("Registered all domain models with adapter")

    @classmethod
    async def shutdown(cls) -> None:
        """
        Close all database connections.

        Should be called at application shutdown.
        """
        for url, adapter in cls._instances.items():
            try:
                await adapter.disconnect()
            except Exception as e:
                logger.error(f"Error disconnecting {url}: {e}")

        cls._instances.clear()
        logger.info("All database connections closed")

    @classmethod
    def get_adapter(
        cls,
        database_url: Optional[str] = None,
    ) -> BaseDatabaseAdapter:
        """
        Get existing adapter instance.

        Raises:
            RuntimeError: If adapter not initialized
        """
        url = database_url or settings.async_database_url

        if url not in cls._instances:
            raise RuntimeError(
                "Database adapter not initialized. "
                "Call DatabaseFactory.initialize() first."
            )

        return cls._instances[url]

    @classmethod
    async def health_check(cls, database_url: Optional[str] = None) -> bool:
        """
        Check database health.

        Returns:
            True if database is healthy
        """
        try:
            adapter = cls.get_adapter(database_url)
            return await adapter.health_check()
        except Exception:
            return False

    @classmethod
    def reset(cls) -> None:
        """
        Reset factory state.

        Clears adapter cache without disconnecting. Used by tests.
        """
        cls._instances.clear()
