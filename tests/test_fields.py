# tests/test_fields.py

"""Tests for the price, title and image normalisers."""

import unittest

from threadfinder.normalizers.fields import (
    PLACEHOLDER_IMAGE,
    UNKNOWN_TITLE,
    format_amount,
    normalize_image_url,
    normalize_price,
    normalize_title,
)


class TestNormalizePrice(unittest.TestCase):
    """normalize_price unit tests."""

    def test_plain_dollar_price(self) -> None:
        """A clean price passes through unchanged."""
        self.assertEqual(normalize_price("$29.99"), "$29.99")

    def test_range_uses_lower_bound(self) -> None:
        """Ranges collapse to the first price."""
        self.assertEqual(normalize_price("$29 - $49"), "$29")

    def test_from_prefix_stripped(self) -> None:
        """A leading 'From' qualifier is dropped."""
        self.assertEqual(normalize_price("From $25"), "$25")

    def test_currency_code_stripped_and_dollar_added(self) -> None:
        """Currency codes are removed and '$' is prefixed."""
        self.assertEqual(normalize_price("USD 45.00"), "$45.00")
        self.assertEqual(normalize_price("45.00 AUD"), "$45.00")

    def test_other_currency_symbol_kept(self) -> None:
        """A pound or euro symbol is preserved."""
        self.assertEqual(normalize_price("£30.00"), "£30.00")
        self.assertEqual(normalize_price("€19"), "€19")

    def test_thousands_separator_removed(self) -> None:
        """Commas are removed from the numeric part."""
        self.assertEqual(normalize_price("1,299.99"), "$1299.99")

    def test_space_after_symbol_removed(self) -> None:
        """'$ 12.50' renders as '$12.50'."""
        self.assertEqual(normalize_price("$ 12.50"), "$12.50")

    def test_unparseable_returns_none(self) -> None:
        """Text without a number yields None, never 0."""
        self.assertIsNone(normalize_price("Call for price"))
        self.assertIsNone(normalize_price("See price"))

    def test_zero_rejected(self) -> None:
        """Zero is not a plausible price."""
        self.assertIsNone(normalize_price("$0"))
        self.assertIsNone(normalize_price("$0.00"))

    def test_negative_rejected(self) -> None:
        """A minus sign anywhere before the digits is not a price."""
        for raw in ("-5", "$-29.99", "-$10", "USD -12.00"):
            with self.subTest(raw=raw):
                self.assertIsNone(normalize_price(raw))

    def test_upper_bound_rejected(self) -> None:
        """Values at or above 50000 are implausible."""
        self.assertIsNone(normalize_price("$50,000"))
        self.assertIsNone(normalize_price("120000"))
        self.assertEqual(normalize_price("$49,999.99"), "$49999.99")

    def test_non_string_input(self) -> None:
        """Non-string or blank input yields None."""
        self.assertIsNone(normalize_price(None))
        self.assertIsNone(normalize_price(29.99))
        self.assertIsNone(normalize_price(""))
        self.assertIsNone(normalize_price("   "))


class TestNormalizeTitle(unittest.TestCase):
    """normalize_title unit tests."""

    def test_whitespace_collapsed(self) -> None:
        """Newlines, tabs and runs of spaces become single spaces."""
        self.assertEqual(
            normalize_title("  Linen\n\tMidi   Dress "),
            "Linen Midi Dress",
        )

    def test_promo_prefixes_stripped(self) -> None:
        """Promotional prefixes followed by punctuation are removed."""
        self.assertEqual(normalize_title("SALE: Linen Dress"), "Linen Dress")
        self.assertEqual(normalize_title("New - Ribbed Top"), "Ribbed Top")
        self.assertEqual(normalize_title("Best Seller: Jeans"), "Jeans")
        self.assertEqual(normalize_title("hot:Slip Skirt"), "Slip Skirt")

    def test_stacked_prefixes_stripped(self) -> None:
        """Several prefixes in a row are all removed."""
        self.assertEqual(
            normalize_title("Sale: New: Wrap Dress"), "Wrap Dress"
        )

    def test_brand_words_kept(self) -> None:
        """Words that merely start like a prefix are untouched."""
        self.assertEqual(
            normalize_title("New Balance 550 Sneakers"),
            "New Balance 550 Sneakers",
        )

    def test_empty_yields_sentinel(self) -> None:
        """Missing or empty titles become 'Unknown Product'."""
        self.assertEqual(normalize_title(None), UNKNOWN_TITLE)
        self.assertEqual(normalize_title(""), UNKNOWN_TITLE)
        self.assertEqual(normalize_title("   "), UNKNOWN_TITLE)
        self.assertEqual(normalize_title("Sale:"), UNKNOWN_TITLE)
        self.assertEqual(normalize_title(42), UNKNOWN_TITLE)

    def test_long_title_truncated(self) -> None:
        """Titles over 120 characters are cut with an ellipsis."""
        result = normalize_title("a" * 200)
        self.assertEqual(len(result), 120)
        self.assertTrue(result.endswith("..."))

    def test_short_title_not_truncated(self) -> None:
        """A 120-character title is kept whole."""
        title = "b" * 120
        self.assertEqual(normalize_title(title), title)

    def test_idempotent(self) -> None:
        """Normalising twice gives the same result as once."""
        samples = [
            "  Linen\n\tMidi   Dress ",
            "Sale: New: Wrap Dress",
            "word " * 40,
            "a" * 200,
            "",
            "Best Seller - Mom Jeans",
        ]
        for raw in samples:
            with self.subTest(raw=raw[:20]):
                once = normalize_title(raw)
                self.assertEqual(normalize_title(once), once)


class TestNormalizeImageUrl(unittest.TestCase):
    """normalize_image_url unit tests."""

    def test_protocol_relative_rewritten(self) -> None:
        """'//host/path' becomes 'https://host/path'."""
        self.assertEqual(
            normalize_image_url("//cdn.example.com/img.jpg"),
            "https://cdn.example.com/img.jpg",
        )

    def test_absolute_url_trimmed(self) -> None:
        """Surrounding whitespace is removed."""
        self.assertEqual(
            normalize_image_url("  https://cdn.example.com/a.jpg "),
            "https://cdn.example.com/a.jpg",
        )

    def test_data_uri_rejected(self) -> None:
        """Inline data URIs are not accepted as product images."""
        self.assertIsNone(
            normalize_image_url("data:image/png;base64,iVBORw0KGgo=")
        )

    def test_placeholder_patterns_rejected(self) -> None:
        """Known placeholder and tracking-pixel images are rejected."""
        for url in (
            "https://cdn.example.com/placeholder.png",
            "https://cdn.example.com/img/blank.gif",
            "https://cdn.example.com/pixel_1x1.gif",
            "https://cdn.example.com/Spacer.png",
        ):
            with self.subTest(url=url):
                self.assertIsNone(normalize_image_url(url))

    def test_malformed_rejected(self) -> None:
        """Strings that are not absolute URLs are rejected."""
        self.assertIsNone(normalize_image_url("not a url"))
        self.assertIsNone(normalize_image_url("/relative/img.jpg"))
        self.assertIsNone(normalize_image_url(""))
        self.assertIsNone(normalize_image_url(None))

    def test_placeholder_constant_is_svg_data_uri(self) -> None:
        """The fallback image is an inline SVG."""
        self.assertTrue(
            PLACEHOLDER_IMAGE.startswith("data:image/svg+xml,")
        )
        self.assertIn("No%20image", PLACEHOLDER_IMAGE)


if __name__ == "__main__":
    unittest.main()


class TestFormatAmount(unittest.TestCase):
    """format_amount unit tests."""

    def test_whole_numbers_lose_decimal_point(self) -> None:
        """55.0 and 55 both render as '55'."""
        self.assertEqual(format_amount(55.0), "55")
        self.assertEqual(format_amount(55), "55")

    def test_fractions_keep_two_decimals(self) -> None:
        """Fractional amounts render with cents."""
        self.assertEqual(format_amount(29.99), "29.99")
        self.assertEqual(format_amount(29.5), "29.50")

    def test_non_finite_is_rejected_downstream(self) -> None:
        """inf and nan never normalise to a price."""
        self.assertIsNone(normalize_price(format_amount(float("inf"))))
        self.assertIsNone(normalize_price(format_amount(float("nan"))))
