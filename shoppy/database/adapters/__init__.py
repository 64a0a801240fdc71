# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.database.adapters.sqlalchemy_adapter import SQLAlchemyAdapter

__all__ = ["BaseDatabaseAdapter", "SQLAlchemyAdapter"]
