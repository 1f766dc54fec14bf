"""Checkout URL parsing and construction."""

from urllib.parse import quote, urlencode

from checkout_validation.domain.boot import LaunchParameters

BOOT_MARKER = "#boot"
_SCHEME_SEPARATOR = "://"


class TokenExtractionError(ValueError):
    """Raised when a redirect URL carries no session token."""


def extract_session_token(url: str) -> str | None:
    """Return the session token embedded in a checkout redirect URL.

    The token is the path segment right before the ``#boot`` marker. Without
    a marker the last path segment is used, stripped of query and fragment.
    """
    if not url:
        return None
    floor = _path_floor(url)
    marker_index = url.find(BOOT_MARKER)
    if marker_index != -1:
        slash_index = url.rfind("/", floor, marker_index)
        if slash_index == -1 or slash_index >= marker_index - 1:
            return None
        return url[slash_index + 1 : marker_index]

    slash_index = url.rfind("/", floor)
    if slash_index == -1 or slash_index == len(url) - 1:
        return None
    segment = url[slash_index + 1 :]
    for delimiter in ("?", "#"):
        cut = segment.find(delimiter)
        if cut != -1:
            segment = segment[:cut]
    return segment or None


def build_launch_url(
    url: str, checkout_public_key: str, parameters: LaunchParameters
) -> str:
    """Add client query parameters to a checkout URL, keeping its fragment last."""
    query = urlencode(
        {
            "cot": checkout_public_key,
            "platform": parameters.platform,
            "browserType": parameters.browser_type,
            "redirectUrl": parameters.redirect_url,
        },
        quote_via=quote,
    )
    query_index = url.find("?")
    fragment_index = url.find("#")
    if query_index != -1:
        if fragment_index > query_index:
            return f"{url[:fragment_index]}&{query}{url[fragment_index:]}"
        return f"{url}&{query}"
    if fragment_index != -1:
        return f"{url[:fragment_index]}?{query}{url[fragment_index:]}"
    return f"{url}?{query}"


def build_token_checkout_url(checkout_url: str, session_token: str) -> str:
    """Build the checkout page URL for an explicit session token."""
    return f"{checkout_url.rstrip('/')}/{quote(session_token, safe='')}"


def build_validate_url(
    base_url: str, order_path: str, purchase_id: str, customer_id: str
) -> str:
    """Build the order-status URL polled for a purchase."""
    path = order_path.strip("/")
    prefix = f"{base_url.rstrip('/')}/{path}" if path else base_url.rstrip("/")
    return (
        f"{prefix}/{quote(purchase_id, safe='')}"
        f"/player/{quote(customer_id, safe='')}"
    )


def _path_floor(url: str) -> int:
    """Index where path separators may start, past any ``scheme://``."""
    scheme_index = url.find(_SCHEME_SEPARATOR)
    if scheme_index == -1:
        return 0
    return scheme_index + len(_SCHEME_SEPARATOR)
