# ==============================================================================
# UTILS PACKAGE INITIALIZATION
# ==============================================================================

"""
Utilities Module
================

Common helper functions.
"""

from shoppy.utils.helpers import (
    generate_uuid,
    generate_reference_id,
    generate_order_number,
    utc_now,
)

__all__ = [
    "generate_uuid",
    "generate_reference_id",
    "generate_order_number",
    "utc_now",
]
