# ==============================================================================
# EXTERNAL API CLIENTS
# ==============================================================================

"""
Vendor API clients.

- SensayClient: replica chat completions and history
- ShopifyClient: Storefront and Admin GraphQL
"""

from shoppy.clients.base_client import HTTPClientPool
from shoppy.clients.sensay_client import SensayClient
from shoppy.clients.shopify_client import ShopifyClient

__all__ = ["HTTPClientPool", "SensayClient", "ShopifyClient"]
