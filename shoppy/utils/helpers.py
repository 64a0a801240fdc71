# ==============================================================================
# HELPER UTILITIES
# ==============================================================================
# Common utility functions used across the application
# ==============================================================================

from __future__ import annotations

import time
from datetime import datetime, timezone
from uuid import uuid4


def generate_uuid() -> str:
    """Generate a new UUID string."""
    return str(uuid4())


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def generate_reference_id(prefix: str = "REF", length: int = 8) -> str:
    """
    Generate a unique reference ID.

    Args:
        prefix: ID prefix (e.g. ORD)
        length: Length of random part

    Returns:
        Formatted reference ID (e.g. ORD-A1B2C3D4)
    """
    random_part = str(uuid4()).replace("-", "")[:length].upper()
    return f"{prefix}-{random_part}"


def generate_order_number() -> str:
    """Order number in the form ``ORD-<epoch ms>-<6 chars>``."""
    return generate_reference_id(prefix=f"ORD-{epoch_millis()}", length=6)


def vendor_user_id(user_id: str) -> str:
    """Identifier registered with Sensay for a local user."""
    return f"customer_{user_id}_{epoch_millis()}"


def truncate(value: str, max_length: int, suffix: str = "...") -> str:
    """Cut ``value`` to ``max_length`` characters, appending ``suffix`` when cut."""
    if len(value) > max_length:
        return value[:max_length] + suffix
    return value
