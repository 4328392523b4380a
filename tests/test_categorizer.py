"""
Tests for URL categorization.
"""

import pytest

from perfsheet.services.categorizer import (
    categorize,
    category_seed,
    humanize_segment,
    is_static_asset,
)


class TestCategorize:
    """Tests for categorize()."""

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://x/api/v2/billing/invoice.json", "Billing"),
            ("https://x/app.css", "Static Asset"),
            ("https://x/api/v1", "General"),
            ("https://x/", "General"),
            ("https://x", "General"),
            ("https://x/v3/orderHistory/42", "Order History"),
            ("https://x/rest/user_profile/me", "User Profile"),
            ("https://x/internal/search-results?q=a.png", "Search Results"),
        ],
    )
    def test_examples(self, url, expected):
        """Test categories for representative URLs."""
        assert categorize(url) == expected

    def test_static_extension_always_wins(self):
        """Test that a static asset extension beats a meaningful segment."""
        assert categorize("https://x/billing/logo.PNG") == "Static Asset"
        assert categorize("https://x/api/v1/bundle.js") == "Static Asset"
        assert categorize("https://x/fonts/inter.woff2") == "Static Asset"

    def test_extension_is_taken_from_whole_path(self):
        """Test that a dot in a directory name does not make an extension."""
        assert categorize("https://x/cdn.js/payments") == "Cdn"

    def test_wrapper_match_is_case_insensitive(self):
        """Test that wrapper segments are skipped regardless of case."""
        assert categorize("https://x/API/V2/Accounts") == "Accounts"

    def test_deterministic(self):
        """Test that the same URL always yields the same category."""
        url = "https://x/api/v2/billing/invoice.json"
        assert {categorize(url) for _ in range(5)} == {"Billing"}

    def test_unparseable_url_is_general(self):
        """Test that categorize never raises on a malformed URL."""
        assert categorize("http://[::1") == "General"


class TestHelpers:
    """Tests for categorization helpers."""

    def test_is_static_asset(self):
        """Test static asset detection by extension."""
        assert is_static_asset("/a/b/site.min.css")
        assert is_static_asset("/x.map")
        assert not is_static_asset("/api/data.json")
        assert not is_static_asset("/")

    def test_category_seed_skips_wrappers(self):
        """Test seed selection skips empty and wrapper segments."""
        assert category_seed("/api/v1/public/users/1") == "users"
        assert category_seed("/api/v1/") is None

    def test_humanize_segment(self):
        """Test title casing of separators and camelCase."""
        assert humanize_segment("user_profile.json") == "User Profile"
        assert humanize_segment("order-history") == "Order History"
        assert humanize_segment("orderHistory") == "Order History"
        assert humanize_segment("billing") == "Billing"
