"""Public link composition."""

LINK_PATH = "/link/"


def build_public_link(base_url: str, token: str) -> str:
    """
    Compose the public URL for a token.

    Args:
        base_url: Public base URL of the web server
        token: Request token

    Returns:
        Fully-qualified link
    """
    return f"{base_url.rstrip('/')}{LINK_PATH}{token}"
