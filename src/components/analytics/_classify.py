"""
User agent and referrer classification.

Plain substring matching over the raw header values. Order matters:
Chromium-based browsers all advertise "Chrome/" and "Safari/", so the more
specific brands are tested first.
"""

from __future__ import annotations

from typing import Literal
from urllib.parse import urlparse

from src.domain.entities import DIRECT_LINK, UNKNOWN

DeviceClass = Literal["Mobile", "Tablet", "Desktop", "Unknown"]
BrowserClass = Literal["Chrome", "Firefox", "Safari", "Edge", "Opera", "Other"]

TABLET_MARKERS = ("iPad", "Tablet")
MOBILE_MARKERS = ("Mobile", "Android", "iPhone", "Windows Phone")
DESKTOP_MARKERS = ("Windows", "Macintosh", "Linux", "X11")

EDGE_MARKERS = ("Edg/", "Edge/", "EdgA/", "EdgiOS/")
OPERA_MARKERS = ("OPR/", "Opera/", "Opera ")
CHROME_MARKERS = ("Chrome/", "CriOS/")
FIREFOX_MARKERS = ("Firefox/", "FxiOS/")


def _has_any(ua: str, markers: tuple[str, ...]) -> bool:
    return any(marker in ua for marker in markers)


def classify_device(user_agent: str | None) -> DeviceClass:
    """Mobile, Tablet, Desktop or Unknown."""
    if not user_agent:
        return "Unknown"

    # Android tablets omit the "Mobile" token.
    if _has_any(user_agent, TABLET_MARKERS) or (
        "Android" in user_agent and "Mobile" not in user_agent
    ):
        return "Tablet"
    if _has_any(user_agent, MOBILE_MARKERS):
        return "Mobile"
    if _has_any(user_agent, DESKTOP_MARKERS):
        return "Desktop"
    return "Unknown"


def is_edge(user_agent: str) -> bool:
    return _has_any(user_agent, EDGE_MARKERS)


def classify_browser(user_agent: str | None) -> BrowserClass:
    """Chrome, Firefox, Safari, Edge, Opera or Other."""
    if not user_agent:
        return "Other"

    if is_edge(user_agent):
        return "Edge"
    if _has_any(user_agent, OPERA_MARKERS):
        return "Opera"
    if _has_any(user_agent, CHROME_MARKERS) and not is_edge(user_agent):
        return "Chrome"
    if _has_any(user_agent, FIREFOX_MARKERS):
        return "Firefox"
    if "Safari/" in user_agent and not _has_any(user_agent, CHROME_MARKERS):
        return "Safari"
    return "Other"


def referrer_domain(referrer: str | None) -> str:
    """
    Host part of a referrer URL.

    Missing referrers are "Direct Link"; values without a host are "Unknown".
    """
    value = (referrer or "").strip()
    if not value or value == DIRECT_LINK:
        return DIRECT_LINK

    try:
        host = urlparse(value).hostname
    except ValueError:
        return UNKNOWN
    return host or UNKNOWN


def location_part(value: str | None) -> str:
    """Country or city name, "Unknown" when blank."""
    return (value or "").strip() or UNKNOWN
