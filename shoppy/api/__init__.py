# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

"""
API Module
==========

FastAPI routers and endpoint definitions:
- Dependencies: Bearer authentication, database access, vendor clients
- Routers: Auth, Chat, Admin, Storefront, Cart, Orders, Payments
"""

from shoppy.api.router import api_router

__all__ = ["api_router"]
