# ==============================================================================
# SHOPPY PACKAGE INITIALIZATION
# ==============================================================================
# AI-assisted shopping backend: replica chat + storefront cart/checkout
# ==============================================================================

"""
Shoppy Sensay API
=================

FastAPI backend for an AI shopping assistant.

Features:
---------
- Chat with a hosted conversational replica (Sensay)
- Product search and storefront carts through the Shopify GraphQL APIs
- Local carts, orders and payment records on async SQLAlchemy
- JWT-based authentication

Usage:
------
    uvicorn shoppy.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
