# ==============================================================================
# SQLALCHEMY ADAPTER - Async SQLAlchemy for SQLite and PostgreSQL
# ==============================================================================
# aiosqlite for development and tests, asyncpg for deployments
# ==============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Type

from sqlalchemy import and_, delete, func, select, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from shoppy.core.settings import settings
from shoppy.core.exceptions import DatabaseError
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter

logger = logging.getLogger(__name__)


class SQLAlchemyAdapter(BaseDatabaseAdapter[Any]):
    """
    Relational database adapter using SQLAlchemy async.

    The driver comes from the URL: ``sqlite+aiosqlite`` gets
    ``check_same_thread=False``; any other backend gets the configured
    connection pool.

    Attributes:
        _database_url: Async connection string
        _engine: SQLAlchemy async engine
        _session_factory: Session factory for creating sessions
        _model_registry: Mapping of collection names to model classes

    Example:
        >>> adapter = SQLAlchemyAdapter("sqlite+aiosqlite:///./dev.db")
        >>> await adapter.connect()
        >>> adapter.register_model("users", User)
        >>> user = await adapter.create("users", {"email": "test@example.com"})
    """

    def __init__(self, database_url: Optional[str] = None) -> None:
        """
        Initialize adapter.

        Args:
            database_url: Async connection URL (defaults to settings)
        """
        self._database_url = database_url or settings.async_database_url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._model_registry: Dict[str, Type[DeclarativeBase]] = {}

    @property
    def is_sqlite(self) -> bool:
        return self._database_url.startswith("sqlite")

    # ==========================================================================
    # MODEL REGISTRY
    # ==========================================================================

    def register_model(
        self,
        name: str,
        model: Type[DeclarativeBase],
    ) -> None:
        """
        Register a SQLAlchemy model under a collection name.

        Args:
            name: Collection/table identifier
            model: SQLAlchemy model class
        """
        self._model_registry[name] = model
        logger.debug(f"Registered model '{name}' -> {model.__name__}")

    def _get_model(self, collection: str) -> Type[DeclarativeBase]:
        """
        Get registered model by collection name.

        Raises:
            ValueError: If model not registered
        """
        if collection not in self._model_registry:
            raise ValueError(
                f"Model '{collection}' not registered. "
                f"Available models: {list(self._model_registry.keys())}"
            )
        return self._model_registry[collection]

    def _conditions(self, model: Type[DeclarativeBase], filters: Optional[Dict[str, Any]]) -> list:
        if not filters:
            return []
        return [
            getattr(model, key) == value
            for key, value in filters.items()
            if hasattr(model, key)
        ]

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Initialize database engine and create tables.

        Raises:
            DatabaseError: If the engine cannot be created or reached
        """
        try:
            engine_kwargs: Dict[str, Any] = {"echo": settings.DEBUG}
            if self.is_sqlite:
                engine_kwargs["connect_args"] = {"check_same_thread": False}
            else:
                engine_kwargs.update(
                    pool_size=settings.DB_POOL_SIZE,
                    max_overflow=settings.DB_MAX_OVERFLOW,
                    pool_recycle=settings.DB_POOL_RECYCLE,
                    pool_pre_ping=True,
                )

            self._engine = create_async_engine(self._database_url, **engine_kwargs)

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            # Create tables
            async with self._engine.begin() as conn:
                from shoppy.domain_models.base import SQLBase
                import shoppy.domain_models  # noqa: F401  (populate metadata)
                await conn.run_sync(SQLBase.metadata.create_all)

            logger.info("Database adapter connected successfully")

        except Exception as e:
            logger.error(f"Failed to connect to database: {e}")
            raise DatabaseError(f"Database connection failed: {e}")

    async def disconnect(self) -> None:
        """Close database connections and dispose engine."""
        if self._engine:
            await self._engine.dispose()
            logger.info("Database adapter disconnected")

    async def health_check(self) -> bool:
        """
        Verify database connectivity.

        Returns:
            True if connection is healthy
        """
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return False

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide transactional session scope.

        Commits on successful exit, rolls back on exception.

        Raises:
            RuntimeError: If database not connected
        """
        if not self._session_factory:
            raise RuntimeError(
                "Database not connected. Call connect() first."
            )

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    # ==========================================================================
    # CRUD OPERATIONS
    # ==========================================================================

    async def create(
        self,
        collection: str,
        data: Dict[str, Any],
    ) -> Any:
        """Create a new record."""
        model = self._get_model(collection)

        async with self.session() as session:
            instance = model(**data)
            session.add(instance)
            await session.flush()
            await session.refresh(instance)
            return instance

    async def get_by_id(
        self,
        collection: str,
        id: Any,
    ) -> Optional[Any]:
        """Retrieve record by primary key."""
        model = self._get_model(collection)

        async with self.session() as session:
            return await session.get(model, id)

    async def get_all(
        self,
        collection: str,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> List[Any]:
        """Retrieve multiple records with pagination and filtering."""
        model = self._get_model(collection)

        async with self.session() as session:
            query = select(model)

            conditions = self._conditions(model, filters)
            if conditions:
                query = query.where(and_(*conditions))

            if sort_by and hasattr(model, sort_by):
                order_column = getattr(model, sort_by)
                if sort_order.lower() == "desc":
                    order_column = order_column.desc()
                query = query.order_by(order_column)

            query = query.offset(skip).limit(limit)

            result = await session.execute(query)
            return list(result.scalars().all())

    async def update(
        self,
        collection: str,
        id: Any,
        data: Dict[str, Any],
    ) -> Optional[Any]:
        """Update an existing record."""
        model = self._get_model(collection)

        async with self.session() as session:
            instance = await session.get(model, id)
            if not instance:
                return None

            for key, value in data.items():
                if hasattr(instance, key):
                    setattr(instance, key, value)

            await session.flush()
            await session.refresh(instance)
            return instance

    async def delete(
        self,
        collection: str,
        id: Any,
    ) -> bool:
        """Delete a record by ID."""
        model = self._get_model(collection)

        async with self.session() as session:
            instance = await session.get(model, id)
            if not instance:
                return False

            await session.delete(instance)
            return True

    # ==========================================================================
    # QUERY OPERATIONS
    # ==========================================================================

    async def count(
        self,
        collection: str,
        filters: Optional[Dict[str, Any]] = None,
    ) -> int:
        """Count records matching filters."""
        model = self._get_model(collection)

        async with self.session() as session:
            query = select(func.count()).select_from(model)

            conditions = self._conditions(model, filters)
            if conditions:
                query = query.where(and_(*conditions))

            result = await session.execute(query)
            return result.scalar() or 0

    async def find_one(
        self,
        collection: str,
        filters: Dict[str, Any],
        sort_by: Optional[str] = None,
        sort_order: str = "asc",
    ) -> Optional[Any]:
        """Find a single record matching filters."""
        results = await self.get_all(
            collection,
            skip=0,
            limit=1,
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return results[0] if results else None

    # ==========================================================================
    # BULK OPERATIONS
    # ==========================================================================

    async def bulk_delete(
        self,
        collection: str,
        filters: Dict[str, Any],
    ) -> int:
        """Bulk delete records matching filters."""
        model = self._get_model(collection)

        async with self.session() as session:
            conditions = self._conditions(model, filters)
            stmt = delete(model).where(and_(*conditions))
            result = await session.execute(stmt)
            return result.rowcount
