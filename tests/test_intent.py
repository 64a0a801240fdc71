# ==============================================================================
# INTENT DETECTION TESTS
# ==============================================================================

import pytest

from shoppy.services.intent import detect_product_search, mentioned_product_type


class TestDetectProductSearch:
    """Product-search classification of chat messages."""

    @pytest.mark.parametrize(
        "message",
        [
            "Show me running shoes",
            "tampilkan tas kulit",
            "Can you RECOMMEND something?",
            "anything under 50?",
            "tambah ke keranjang",
        ],
    )
    def test_specific_intent(self, message):
        assert detect_product_search(message) is True

    def test_detailed_requirements_need_length(self):
        assert detect_product_search("laptop for gaming and streaming at night") is True
        assert detect_product_search("for gaming") is False

    @pytest.mark.parametrize(
        "message",
        [
            "mostly casual",
            "I prefer black",
            "$500-800",
            "Rp 2-3",
            "sekitar 2 juta rp",
        ],
    )
    def test_answering_questions(self, message):
        assert detect_product_search(message) is True

    @pytest.mark.parametrize(
        "message",
        ["Hello", "What are your opening hours?", "thanks!", "$500"],
    )
    def test_general_chat(self, message):
        assert detect_product_search(message) is False


class TestMentionedProductType:

    def test_first_known_type(self):
        assert mentioned_product_type("a smartphone or a watch", "products") == "phone"

    def test_default(self):
        assert mentioned_product_type("something nice", "item") == "item"
