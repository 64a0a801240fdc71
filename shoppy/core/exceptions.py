# ==============================================================================
# CUSTOM EXCEPTIONS - Application Error Hierarchy
# ==============================================================================
# Structured exception classes for consistent error handling
# Each exception maps to an HTTP status code and a JSON error envelope
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code to return
        details: Additional context dictionary

    Example:
        >>> raise AppException(
        ...     message="Something went wrong",
        ...     error_code="INTERNAL_ERROR",
        ...     status_code=500
        ... )
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format for JSON response.

        Returns:
            Dictionary containing error details
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"status_code={self.status_code})"
        )


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Raised when the database cannot be reached or initialized.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=503,
            details=details,
        )


# ==============================================================================
# RESOURCE EXCEPTIONS
# ==============================================================================

class NotFoundError(AppException):
    """
    Raised when a requested resource does not exist.

    Also used when the resource exists but belongs to another user, so
    that callers cannot probe for foreign ids.

    Attributes:
        resource_type: Type of resource that was not found
        resource_id: Identifier of the missing resource
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyExistsError(AppException):
    """
    Raised when attempting to create a resource that already exists.

    Maps to HTTP 400; clients treat duplicates as a plain bad request.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if resource_type:
            _details["resource_type"] = resource_type

        super().__init__(
            message=message,
            error_code="ALREADY_EXISTS",
            status_code=400,
            details=_details,
        )


# ==============================================================================
# VALIDATION EXCEPTIONS
# ==============================================================================

class BadRequestError(AppException):
    """
    Raised for malformed or incomplete requests.

    Maps to HTTP 400 Bad Request.
    """

    def __init__(
        self,
        message: str = "Bad request",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="BAD_REQUEST",
            status_code=400,
            details=details,
        )


class BusinessRuleError(AppException):
    """
    Raised when a business rule is violated (e.g. checking out an empty cart).

    Maps to HTTP 400 Bad Request.
    """

    def __init__(
        self,
        message: str = "Business rule violation",
        rule: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if rule:
            _details["violated_rule"] = rule

        super().__init__(
            message=message,
            error_code="BUSINESS_RULE_ERROR",
            status_code=400,
            details=_details,
        )


# ==============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# ==============================================================================

class AuthenticationError(AppException):
    """
    Raised when authentication fails.

    Maps to HTTP 401 Unauthorized.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="AUTHENTICATION_ERROR",
            status_code=401,
            details=details,
        )


class AuthorizationError(AppException):
    """
    Raised when an authenticated user lacks permission for an action.

    Maps to HTTP 403 Forbidden.
    """

    def __init__(
        self,
        message: str = "Permission denied",
        required_permission: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if required_permission:
            _details["required_permission"] = required_permission

        super().__init__(
            message=message,
            error_code="AUTHORIZATION_ERROR",
            status_code=403,
            details=_details,
        )


class TokenExpiredError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(
        self,
        message: str = "Token has expired",
    ) -> None:
        super().__init__(message=message)
        self.error_code = "TOKEN_EXPIRED"


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(
        self,
        message: str = "Invalid token",
    ) -> None:
        super().__init__(message=message)
        self.error_code = "INVALID_TOKEN"


# ==============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# ==============================================================================

class ExternalServiceError(AppException):
    """
    Raised when a vendor API call fails.

    The message is safe to show to end users; the upstream status and
    failure reason are kept for callers that need to branch on them.

    Attributes:
        service_name: Vendor identifier ("sensay", "shopify")
        upstream_status: HTTP status returned by the vendor, if any
        reason: Transport failure kind ("timeout", "connection") or None
    """

    def __init__(
        self,
        message: str = "External service request failed",
        service_name: str = "external",
        upstream_status: Optional[int] = None,
        reason: Optional[str] = None,
        error_code: str = "EXTERNAL_SERVICE_ERROR",
    ) -> None:
        details: Dict[str, Any] = {"service": service_name}
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        if reason:
            details["reason"] = reason

        super().__init__(
            message=message,
            error_code=error_code,
            status_code=500,
            details=details,
        )
        self.service_name = service_name
        self.upstream_status = upstream_status
        self.reason = reason


class SensayAPIError(ExternalServiceError):
    """Raised when the Sensay replica API fails."""

    def __init__(
        self,
        message: str = "Sensay API request failed",
        upstream_status: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            service_name="sensay",
            upstream_status=upstream_status,
            reason=reason,
            error_code="SENSAY_API_ERROR",
        )


class ShopifyAPIError(ExternalServiceError):
    """Raised when the Shopify Storefront or Admin API fails."""

    def __init__(
        self,
        message: str = "Shopify API request failed",
        upstream_status: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        super().__init__(
            message=message,
            service_name="shopify",
            upstream_status=upstream_status,
            reason=reason,
            error_code="SHOPIFY_API_ERROR",
        )
