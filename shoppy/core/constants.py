# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# ==============================================================================

from __future__ import annotations

from typing import Final


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Collection names the adapter registry maps to ORM models."""

    USERS_COLLECTION: Final[str] = "users"
    CHAT_SESSIONS_COLLECTION: Final[str] = "chat_sessions"
    CHAT_MESSAGES_COLLECTION: Final[str] = "chat_messages"
    CARTS_COLLECTION: Final[str] = "carts"
    CART_ITEMS_COLLECTION: Final[str] = "cart_items"
    ORDERS_COLLECTION: Final[str] = "orders"
    ORDER_ITEMS_COLLECTION: Final[str] = "order_items"
    PAYMENTS_COLLECTION: Final[str] = "payments"
    API_USAGE_COLLECTION: Final[str] = "api_usage"


# ==============================================================================
# QUERY LIMITS
# ==============================================================================

class QueryLimits:
    """Row limits applied by list endpoints."""

    HISTORY_SESSIONS: Final[int] = 10
    SESSION_SUMMARIES: Final[int] = 20
    SESSION_TITLE_LENGTH: Final[int] = 30
    USER_ORDERS: Final[int] = 10
    API_USAGE: Final[int] = 100
    SEARCH_RESULTS: Final[int] = 5
    FEATURED_PRODUCTS: Final[int] = 10
    UNBOUNDED: Final[int] = 10_000


# ==============================================================================
# MESSAGE ROLE CONSTANTS
# ==============================================================================

class MessageRoles:
    """Chat message role constants."""

    USER: Final[str] = "user"
    ASSISTANT: Final[str] = "assistant"


# ==============================================================================
# API USAGE ENDPOINT NAMES
# ==============================================================================

class UsageEndpoints:
    """Labels recorded in the API usage log."""

    CREATE_USER: Final[str] = "create_user"
    CHAT: Final[str] = "chat"
    CHAT_HISTORY: Final[str] = "get_chat_history"


# ==============================================================================
# INTENT DETECTION KEYWORDS
# ==============================================================================

class IntentKeywords:
    """
    Substrings used to classify a chat message as a product search.

    English and Indonesian phrases are mixed on purpose; customers write both.
    """

    PRODUCT_TYPES: Final[tuple[str, ...]] = (
        "phone", "smartphone", "laptop", "computer", "shoes",
        "bag", "watch", "shirt", "clothes", "electronics",
    )
    SEARCH_INDICATORS: Final[tuple[str, ...]] = (
        "show me", "tampilkan", "cari yang", "search for", "find me",
        "dengan budget", "with budget", "harga", "price range", "under", "di bawah",
        "beli sekarang", "buy now", "add to cart", "tambah ke keranjang",
        "rekomendasi", "recommend", "suggest", "pilihkan", "i want to buy",
        "looking for with", "need something with", "budget of", "around",
    )
    REQUIREMENT_WORDS: Final[tuple[str, ...]] = (
        "untuk", "for", "gaming", "photography", "business", "budget",
        "range", "style", "work", "daily", "professional",
    )
    ANSWER_WORDS: Final[tuple[str, ...]] = (
        "mainly", "mostly", "prefer", "important", "need it for",
    )
    DETAILED_MIN_LENGTH: Final[int] = 25


# ==============================================================================
# ERROR MESSAGES
# ==============================================================================

class ErrorMessages:
    """Standardized error messages."""

    # Authentication
    TOKEN_REQUIRED: Final[str] = "Access token required"
    TOKEN_INVALID: Final[str] = "Invalid token"
    USER_NOT_FOUND: Final[str] = "User not found"
    INVALID_PASSWORD: Final[str] = "Invalid password"
    ADMIN_REQUIRED: Final[str] = "Admin access required"

    # Validation
    REGISTER_FIELDS_REQUIRED: Final[str] = "Email, username, and password are required"
    LOGIN_FIELDS_REQUIRED: Final[str] = "Email/username and password are required"
    PASSWORD_TOO_SHORT: Final[str] = "Password must be at least 6 characters"
    USER_EXISTS: Final[str] = "User already exists with this email or username"
    MESSAGE_REQUIRED: Final[str] = "Message is required"
    SEARCH_QUERY_REQUIRED: Final[str] = "Search query is required"
    QUANTITY_REQUIRED: Final[str] = "Quantity is required"
    STATUS_REQUIRED: Final[str] = "Status is required"
    PAYMENT_FIELDS_REQUIRED: Final[str] = "Order ID and payment data are required"
    CART_FIELDS_REQUIRED: Final[str] = "Product ID and variant ID are required"
    STOREFRONT_CART_FIELDS_REQUIRED: Final[str] = "Cart ID and variant ID are required"
    INVALID_ORDER_STATUS: Final[str] = "Invalid order status"
    INVALID_PAYMENT_STATUS: Final[str] = "Invalid payment status"

    # Resources
    PRODUCT_NOT_FOUND: Final[str] = "Product not found"
    VARIANT_NOT_FOUND: Final[str] = "Product variant not found"
    CART_ITEM_NOT_FOUND: Final[str] = "Cart item not found"
    ORDER_NOT_FOUND: Final[str] = "Order not found"
    PAYMENT_NOT_FOUND: Final[str] = "Payment not found"

    # Business rules
    CART_EMPTY: Final[str] = "Cart is empty"
    PAYMENT_EXISTS: Final[str] = "Payment already recorded with this payment ID"


# ==============================================================================
# CHAT FAILURE MESSAGES
# ==============================================================================

class ChatFailureMessages:
    """User-facing texts shown when the replica cannot answer."""

    TIMEOUT: Final[str] = (
        "The request timed out. The AI service might be busy. Please try again."
    )
    CONNECTION: Final[str] = (
        "Unable to connect to the AI service. Please check your internet "
        "connection and try again."
    )
    UNAUTHORIZED: Final[str] = (
        "Authentication error. Please try logging out and back in."
    )
    RATE_LIMITED: Final[str] = (
        "Too many requests. Please wait a moment before trying again."
    )
    DEFAULT: Final[str] = (
        "Sorry, I'm having trouble connecting right now. Please try again in a moment."
    )


# ==============================================================================
# SUCCESS MESSAGES
# ==============================================================================

class SuccessMessages:
    """Standardized success messages."""

    USER_REGISTERED: Final[str] = "User registered successfully"
    LOGIN_SUCCESS: Final[str] = "Login successful"
    ITEM_ADDED: Final[str] = "Item added to cart"
    CART_UPDATED: Final[str] = "Cart updated"
    CART_CLEARED: Final[str] = "Cart cleared"
    ORDER_PLACED: Final[str] = "Order placed successfully"
    PAYMENT_RECORDED: Final[str] = "Payment recorded"
    PAYMENT_UPDATED: Final[str] = "Payment status updated"
