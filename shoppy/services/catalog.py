# ==============================================================================
# CATALOG HELPERS - Search Queries & Product Text
# ==============================================================================
# Pure functions shared by the storefront client, chat and search routes
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from shoppy.core.settings import settings


# Each group adds its terms when any trigger appears in the text
CATEGORY_GROUPS: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("kemeja", "shirt", "t-shirt", "tshirt"), ("shirt", "kemeja", "t-shirt", "tshirt")),
    (("celana", "pants", "jeans"), ("pants", "celana", "jeans")),
    (("sepatu", "shoes", "sneakers"), ("shoes", "sepatu", "sneakers")),
    (("tops", "atasan", "blouse"), ("tops", "atasan", "shirt", "blouse", "t-shirt")),
    (("hoodie", "hoodies", "sweater"), ("hoodie", "hoodies", "sweater")),
    (("polo", "polos"), ("polo", "polos")),
    (("oversized", "loose"), ("oversized", "loose", "relaxed")),
    (("phone", "smartphone", "handphone"), ("phone", "smartphone", "handphone", "mobile")),
    (("laptop", "computer", "notebook"), ("laptop", "computer", "notebook")),
)

STOPWORDS = frozenset({
    "the", "and", "for", "with", "like", "want", "need", "looking", "show",
    "find", "could", "would", "something", "budget", "range", "prefer",
    "comfortable",
})

NO_PRODUCTS_TEXT = (
    "Maaf, saya tidak menemukan produk yang sesuai dengan pencarian Anda. "
    "Coba dengan kata kunci yang berbeda."
)
PRODUCTS_FOOTER = (
    "Apakah ada produk yang ingin Anda tambahkan ke keranjang? "
    "Atau ingin melihat detail lebih lanjut?"
)


def _title_or_tag(terms: Sequence[str]) -> str:
    title_queries = " OR ".join(f"title:*{term}*" for term in terms)
    tag_queries = " OR ".join(f"tag:{term}" for term in terms)
    return f"({title_queries}) OR ({tag_queries})"


def build_search_query(text: str) -> str:
    """
    Turn free text into a Shopify product search query.

    Known categories expand to their synonyms; otherwise the first three
    meaningful words are used.

    Example:
        >>> build_search_query("Cari sepatu lari")
        '(title:*shoes* OR title:*sepatu* OR title:*sneakers*) OR (tag:shoes OR tag:sepatu OR tag:sneakers)'
    """
    clean_text = text.strip().lower()

    terms: List[str] = []
    for triggers, group_terms in CATEGORY_GROUPS:
        if any(trigger in clean_text for trigger in triggers):
            terms.extend(group_terms)

    if terms:
        return _title_or_tag(terms)

    meaningful = [
        word for word in clean_text.split(" ")
        if len(word) > 2 and word not in STOPWORDS
    ]
    if meaningful:
        return _title_or_tag(meaningful[:3])

    return f"title:*{clean_text.split(' ')[0]}*"


def format_price(amount: Any, currency_code: str) -> str:
    """
    Render a price for chat output.

    IDR uses Indonesian grouping (``Rp 1.250.000``), USD a dollar sign,
    anything else the amount followed by the currency code.
    """
    price = float(amount)

    if currency_code == "IDR":
        text = f"{price:,.3f}".rstrip("0").rstrip(".")
        text = text.replace(",", "_").replace(".", ",").replace("_", ".")
        return f"Rp {text}"

    if currency_code == "USD":
        return f"${price:.2f}"

    return f"{price:.2f} {currency_code}"


def product_price(product: Dict[str, Any]) -> str:
    """Formatted minimum variant price of a storefront product."""
    min_price = product.get("priceRange", {}).get("minVariantPrice", {})
    return format_price(min_price.get("amount", 0), min_price.get("currencyCode", "USD"))


def product_image(product: Dict[str, Any]) -> str:
    """URL of the first product image, or an empty string."""
    edges = product.get("images", {}).get("edges", [])
    return edges[0]["node"]["url"] if edges else ""


def format_products_for_chat(products: List[Dict[str, Any]]) -> str:
    """Indonesian product list used by the search and featured routes."""
    if not products:
        return NO_PRODUCTS_TEXT

    lines = [f"Saya menemukan {len(products)} produk yang cocok:\n\n"]
    for index, product in enumerate(products, start=1):
        title = product.get("title", "")
        availability = "Tersedia" if (product.get("totalInventory") or 0) > 0 else "Stok Habis"

        lines.append(f"{index}. **{title}**\n")
        lines.append(f"   Harga: {product_price(product)}\n")
        lines.append(f"   Status: {availability}\n")
        description = product.get("description")
        if description:
            lines.append(f"   Deskripsi: {description[:100]}...\n")
        image = product_image(product)
        if image:
            lines.append(f"   ![{title}]({image})\n")
        lines.append(
            f"   Link: https://{settings.SHOPIFY_STORE_NAME}.myshopify.com"
            f"/products/{product.get('handle', '')}\n\n"
        )

    lines.append(PRODUCTS_FOOTER)
    return "".join(lines)
