# ==============================================================================
# BASE DATABASE ADAPTER - Abstract Interface
# ==============================================================================
# Defines the contract the services program against
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncIterator,
    Dict,
    Generic,
    List,
    Optional,
    TypeVar,
)

# Type variable for generic database records
T = TypeVar("T")


class BaseDatabaseAdapter(ABC, Generic[T]):
    """
    Abstract Base Class for Database Adapters.

    Services only talk to this interface: every call addresses a
    *collection* name registered by the factory and returns detached
    records, so callers never hold a session open across awaits on
    external APIs.

    Generic Parameters:
        T: The type of records returned by the adapter

    Example:
        >>> adapter = SQLAlchemyAdapter()
        >>> await adapter.connect()
        >>> user = await adapter.create("users", {"email": "test@example.com"})
        >>> await adapter.disconnect()
    """

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish database connection and create missing tables.

        Raises:
            DatabaseError: If connection cannot be established
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Release all pooled connections."""

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if database connection is healthy.

        Returns:
            True if connection is healthy, False otherwise
        """

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @abstractmethod
    @asynccontextmanager
    async def session(self) -> AsyncIterator[Any]:
        """
        Provide a transactional session scope.

        Changes are committed on successful exit or rolled back on exception.
        """
        yield

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def create(self, collection: str, data: Dict[str, Any]) -> T:
        """Insert a record and return it with generated fields populated."""

    @abstractmethod
    async def get_by_id(self, collection: str, id: Any) -> Optional[T]:
        """Retrieve a record by primary key, or None."""

    @abstractmethod
    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[T]:
        """
        Retrieve records with equality filters, sorting and pagination.

        Args:
            collection: Registered collection name
            skip: Number of records to skip
            limit: Maximum records to return
            filters: Field equality filters
            sort_by: Field to sort by
            sort_order: "asc" or "desc"
        """

    @abstractmethod
    async def update(
        self,
        collection: str,
        id: Any,
        data: Dict[str, Any],
    ) -> Optional[T]:
        """Update fields of a record; returns None when it does not exist."""

    @abstractmethod
    async def delete(self, collection: str, id: Any) -> bool:
        """Delete a record; returns False when it does not exist."""

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    @abstractmethod
    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count records matching filters."""

    @abstractmethod
    async def find_one(
        self,
        collection: str,
        filters: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> Optional[T]:
        """Return the first record matching filters, or None."""

    @abstractmethod
    async def bulk_delete(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> int:
        """Delete every record matching filters; returns the row count."""
