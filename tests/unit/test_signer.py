"""
Unit Tests for Request Signing

These tests verify that the signer:
- Produces deterministic 128-character lowercase hex signatures
- Builds the canonical URL with and without a query segment
- Keeps the caller's parameter order (order changes the signature)
- Form-encodes values the way the server decodes them

Run with:
    pytest tests/unit/test_signer.py -v
"""

import hashlib
import hmac
import re
from decimal import Decimal

import pytest

from ionomy.signer import canonical_url, encode_query, format_value, sign, sign_url


BASE_URL = "https://ionomy.com/api/v1/"
SECRET = "test-secret"


def expected_hmac(message: str, secret: str = SECRET) -> str:
    return hmac.new(secret.encode(), message.encode(), hashlib.sha512).hexdigest()


# ============================================
# Signature Shape & Determinism
# ============================================

class TestSignature:
    """Tests for sign() and sign_url()"""

    def test_signature_is_128_lowercase_hex(self):
        """Verify the digest is hex-encoded SHA-512"""
        signature = sign(BASE_URL, "account/balance", {"currency": "BTC"}, SECRET, 1700000000)
        assert re.fullmatch(r"[0-9a-f]{128}", signature)

    def test_signature_is_deterministic(self):
        """Verify identical inputs always give the same signature"""
        args = (BASE_URL, "market/buy-limit", {"market": "BTC-LTC", "amount": 1, "price": 2}, SECRET, 1700000000)
        assert sign(*args) == sign(*args)

    def test_signature_matches_hmac_over_url_and_timestamp(self):
        """Verify the signed string is the full URL followed by the timestamp"""
        signature = sign(BASE_URL, "account/balance", {"currency": "BTC"}, SECRET, 1700000000)
        assert signature == expected_hmac(f"{BASE_URL}account/balance?currency=BTC1700000000")

    def test_empty_params_omit_query_segment(self):
        """Verify no '?' is added when there are no parameters"""
        signature = sign(BASE_URL, "public/markets", {}, SECRET, 1000)
        assert signature == expected_hmac(f"{BASE_URL}public/markets1000")

    def test_none_params_same_as_empty(self):
        assert sign(BASE_URL, "public/markets", None, SECRET, 1000) == sign(BASE_URL, "public/markets", {}, SECRET, 1000)

    def test_parameter_order_changes_signature(self):
        """Verify {a:1,b:2} and {b:2,a:1} sign differently (order is part of the URL)"""
        first = sign(BASE_URL, "public/orderbook", {"a": 1, "b": 2}, SECRET, 1000)
        second = sign(BASE_URL, "public/orderbook", {"b": 2, "a": 1}, SECRET, 1000)
        assert first != second

    def test_timestamp_changes_signature(self):
        assert sign(BASE_URL, "public/markets", {}, SECRET, 1000) != sign(BASE_URL, "public/markets", {}, SECRET, 1001)

    def test_secret_changes_signature(self):
        assert sign(BASE_URL, "public/markets", {}, "one", 1000) != sign(BASE_URL, "public/markets", {}, "two", 1000)

    def test_sign_equals_sign_url_of_canonical_url(self):
        params = {"market": "BTC-LTC", "type": "both"}
        url = canonical_url(BASE_URL, "public/orderbook", params)
        assert sign(BASE_URL, "public/orderbook", params, SECRET, 42) == sign_url(url, SECRET, 42)


# ============================================
# Canonical URL & Query Encoding
# ============================================

class TestCanonicalURL:
    """Tests for canonical_url() and encode_query()"""

    def test_url_without_params(self):
        assert canonical_url(BASE_URL, "public/markets") == "https://ionomy.com/api/v1/public/markets"

    def test_url_with_params_keeps_order(self):
        url = canonical_url(BASE_URL, "market/buy-limit", {"market": "BTC-LTC", "amount": 1.5, "price": 0.0061})
        assert url == "https://ionomy.com/api/v1/market/buy-limit?market=BTC-LTC&amount=1.5&price=0.0061"

    def test_space_encoded_as_plus(self):
        """Verify form encoding: space becomes '+'"""
        assert encode_query({"note": "a b"}) == "note=a+b"

    def test_reserved_characters_escaped(self):
        assert encode_query({"address": "a&b=c"}) == "address=a%26b%3Dc"

    def test_empty_query(self):
        assert encode_query({}) == ""
        assert encode_query(None) == ""


class TestFormatValue:
    """Tests for query value rendering"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("BTC-LTC", "BTC-LTC"),
            (5, "5"),
            (2.0, "2"),
            (100.0, "100"),
            (1.5, "1.5"),
            (0.00000001, "0.00000001"),
            (Decimal("1.50"), "1.5"),
            (True, "true"),
            (False, "false"),
        ],
    )
    def test_format_value(self, value, expected):
        assert format_value(value) == expected
