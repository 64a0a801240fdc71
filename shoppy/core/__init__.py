# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Security, Exceptions, Constants
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for the application:
- settings: Environment configuration management
- security: JWT authentication and password hashing
- exceptions: Custom exception classes
- constants: Application-wide constants
"""

from shoppy.core.settings import settings, get_settings
from shoppy.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    BadRequestError,
    BusinessRuleError,
    DatabaseError,
    ExternalServiceError,
    NotFoundError,
    SensayAPIError,
    ShopifyAPIError,
)

__all__ = [
    "settings",
    "get_settings",
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "BadRequestError",
    "BusinessRuleError",
    "DatabaseError",
    "ExternalServiceError",
    "NotFoundError",
    "SensayAPIError",
    "ShopifyAPIError",
]
