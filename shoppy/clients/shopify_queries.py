# ==============================================================================
# SHOPIFY GRAPHQL DOCUMENTS
# ==============================================================================

PRODUCT_FIELDS = """
    id
    title
    handle
    description
    totalInventory
    priceRange {
      minVariantPrice {
        amount
        currencyCode
      }
    }
"""

VARIANT_EDGES = """
      edges {
        node {
          id
          title
          price {
            amount
            currencyCode
          }
          availableForSale
        }
      }
"""

IMAGE_EDGES = """
      edges {
        node {
          url
        }
      }
"""

CART_FIELDS = """
    id
    checkoutUrl
    totalQuantity
    cost {
      totalAmount {
        amount
        currencyCode
      }
    }
"""

SEARCH_PRODUCTS = f"""
query searchProducts($searchText: String!, $limit: Int!) {{
  products(first: $limit, query: $searchText) {{
    edges {{
      node {{
        {PRODUCT_FIELDS}
        images(first: 1) {{ {IMAGE_EDGES} }}
        variants(first: 3) {{ {VARIANT_EDGES} }}
      }}
    }}
  }}
}}
"""

PRODUCT_BY_HANDLE = f"""
query getProduct($handle: String!) {{
  product(handle: $handle) {{
    {PRODUCT_FIELDS}
    images(first: 5) {{ {IMAGE_EDGES} }}
    variants(first: 10) {{ {VARIANT_EDGES} }}
  }}
}}
"""

PRODUCT_BY_ID = f"""
query getProduct($id: ID!) {{
  product(id: $id) {{
    {PRODUCT_FIELDS}
    images(first: 1) {{ {IMAGE_EDGES} }}
    variants(first: 10) {{ {VARIANT_EDGES} }}
  }}
}}
"""

FEATURED_PRODUCTS = f"""
query getFeaturedProducts($limit: Int!) {{
  products(first: $limit, sortKey: BEST_SELLING) {{
    edges {{
      node {{
        {PRODUCT_FIELDS}
        images(first: 1) {{ {IMAGE_EDGES} }}
      }}
    }}
  }}
}}
"""

CART_CREATE = f"""
mutation cartCreate {{
  cartCreate {{
    cart {{ {CART_FIELDS} }}
    userErrors {{
      field
      message
    }}
  }}
}}
"""

CART_LINES_ADD = f"""
mutation cartLinesAdd($cartId: ID!, $lines: [CartLineInput!]!) {{
  cartLinesAdd(cartId: $cartId, lines: $lines) {{
    cart {{ {CART_FIELDS} }}
    userErrors {{
      field
      message
    }}
  }}
}}
"""

GET_CART = f"""
query getCart($cartId: ID!) {{
  cart(id: $cartId) {{
    {CART_FIELDS}
    lines(first: 100) {{
      edges {{
        node {{
          id
          quantity
          merchandise {{
            ... on ProductVariant {{
              id
              title
              product {{
                title
                handle
              }}
              price {{
                amount
                currencyCode
              }}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""

ORDER_STATUS = """
query getOrderStatus($orderName: String!) {
  orders(first: 1, query: $orderName) {
    edges {
      node {
        id
        name
        displayFulfillmentStatus
        fulfillmentOrders(first: 1) {
          edges {
            node {
              status
              lineItems(first: 5) {
                edges {
                  node {
                    lineItem {
                      name
                    }
                  }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""
