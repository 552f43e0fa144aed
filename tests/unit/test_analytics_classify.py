"""
Tests for user agent and referrer classification.
"""

from __future__ import annotations

import pytest

from src.components.analytics import classify_browser, classify_device, referrer_domain

CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
EDGE_WINDOWS = CHROME_WINDOWS + " Edg/120.0.2210.91"
OPERA_WINDOWS = CHROME_WINDOWS + " OPR/106.0.0.0"
FIREFOX_LINUX = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
SAFARI_MAC = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Safari/605.1.15"
)
SAFARI_IPHONE = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
SAFARI_IPAD = (
    "Mozilla/5.0 (iPad; CPU OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
CHROME_ANDROID_PHONE = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)
CHROME_ANDROID_TABLET = (
    "Mozilla/5.0 (Linux; Android 13; SM-X700) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
CHROME_IOS = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) CriOS/120.0.6099.119 Mobile/15E148 Safari/604.1"
)
CURL = "curl/8.4.0"


class TestClassifyBrowser:
    """Test browser classification."""

    @pytest.mark.parametrize(
        ("ua", "expected"),
        [
            (CHROME_WINDOWS, "Chrome"),
            (EDGE_WINDOWS, "Edge"),
            (OPERA_WINDOWS, "Opera"),
            (FIREFOX_LINUX, "Firefox"),
            (SAFARI_MAC, "Safari"),
            (SAFARI_IPHONE, "Safari"),
            (CHROME_ANDROID_PHONE, "Chrome"),
            (CHROME_IOS, "Chrome"),
            (CURL, "Other"),
        ],
    )
    def test_known_agents(self, ua: str, expected: str) -> None:
        assert classify_browser(ua) == expected

    def test_edge_marker_always_wins(self) -> None:
        """Any UA carrying "Edg/" is Edge, whatever else it advertises."""
        for base in (CHROME_WINDOWS, SAFARI_MAC, FIREFOX_LINUX, CHROME_ANDROID_PHONE):
            assert classify_browser(f"{base} Edg/119.0") == "Edge"

    def test_chrome_is_not_safari(self) -> None:
        """Chrome UAs also contain "Safari/" but are not Safari."""
        assert "Safari/" in CHROME_WINDOWS
        assert classify_browser(CHROME_WINDOWS) != "Safari"

    @pytest.mark.parametrize("ua", [None, ""])
    def test_missing_is_other(self, ua: str | None) -> None:
        assert classify_browser(ua) == "Other"


class TestClassifyDevice:
    """Test device classification."""

    @pytest.mark.parametrize(
        ("ua", "expected"),
        [
            (CHROME_WINDOWS, "Desktop"),
            (FIREFOX_LINUX, "Desktop"),
            (SAFARI_MAC, "Desktop"),
            (SAFARI_IPHONE, "Mobile"),
            (CHROME_ANDROID_PHONE, "Mobile"),
            (SAFARI_IPAD, "Tablet"),
            (CHROME_ANDROID_TABLET, "Tablet"),
            (CURL, "Unknown"),
        ],
    )
    def test_known_agents(self, ua: str, expected: str) -> None:
        assert classify_device(ua) == expected

    def test_windows_phone_is_mobile(self) -> None:
        """Windows Phone is not mistaken for desktop Windows."""
        ua = "Mozilla/5.0 (Windows Phone 10.0; Android 6.0.1) Mobile Safari/537.36 Edge/15.15063"
        assert classify_device(ua) == "Mobile"

    @pytest.mark.parametrize("ua", [None, ""])
    def test_missing_is_unknown(self, ua: str | None) -> None:
        assert classify_device(ua) == "Unknown"


class TestReferrerDomain:
    """Test referrer host extraction."""

    @pytest.mark.parametrize(
        ("referrer", "expected"),
        [
            ("https://www.google.com/search?q=portfolio", "www.google.com"),
            ("http://news.ycombinator.com/item?id=1", "news.ycombinator.com"),
            ("https://LinkedIn.com/feed", "linkedin.com"),
        ],
    )
    def test_host_extracted(self, referrer: str, expected: str) -> None:
        assert referrer_domain(referrer) == expected

    @pytest.mark.parametrize("referrer", [None, "", "   ", "Direct Link"])
    def test_missing_is_direct(self, referrer: str | None) -> None:
        assert referrer_domain(referrer) == "Direct Link"

    @pytest.mark.parametrize("referrer", ["not a url", "google.com", "http://[::1"])
    def test_unparsable_is_unknown(self, referrer: str) -> None:
        assert referrer_domain(referrer) == "Unknown"
