# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================

from shoppy.database.factory import DatabaseFactory
from shoppy.database.adapters import BaseDatabaseAdapter, SQLAlchemyAdapter

__all__ = ["DatabaseFactory", "BaseDatabaseAdapter", "SQLAlchemyAdapter"]
