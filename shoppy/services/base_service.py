# ==============================================================================
# BASE SERVICE - Generic Business Logic Layer
# ==============================================================================
# Abstract service bound to one collection of the database adapter
# ==============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.core.exceptions import NotFoundError

ResponseSchemaType = TypeVar("ResponseSchemaType", bound=BaseModel)


class BaseService(ABC, Generic[ResponseSchemaType]):
    """
    Abstract base service.

    Attributes:
        _adapter: Database adapter for operations
        _collection_name: Primary table/collection identifier

    Example:
        >>> class CartService(BaseService[CartResponse]):
        ...     def _to_response(self, entity):
        ...         return CartResponse.model_validate(entity.to_dict())
    """

    def __init__(
        self,
        adapter: BaseDatabaseAdapter,
        collection_name: str,
    ) -> None:
        self._adapter = adapter
        self._collection_name = collection_name

    @abstractmethod
    def _to_response(self, entity: Any) -> ResponseSchemaType:
        """Convert entity to response schema."""

    async def _get_or_404(
        self,
        id: Any,
        message: Optional[str] = None,
        collection: Optional[str] = None,
    ) -> Any:
        """
        Load a record by id.

        Raises:
            NotFoundError: If the record does not exist
        """
        collection = collection or self._collection_name
        result = await self._adapter.get_by_id(collection, id)
        if not result:
            raise NotFoundError(
                message=message or f"{collection} not found",
                resource_type=collection,
                resource_id=id,
            )
        return result
