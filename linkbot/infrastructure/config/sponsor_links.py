"""Sponsor link parsing."""

TELEGRAM_LINK_PREFIX = "https://t.me/"


def parse_sponsor_links(raw: str) -> list[str]:
    """
    Parse a raw sponsor link string into an ordered list without duplicates.

    Links may be separated by commas or simply concatenated; every
    ``https://t.me/`` occurrence starts a new link. When the string holds no
    such occurrence it is split on commas instead.

    Args:
        raw: Raw value of the SPONSOR_LINKS setting

    Returns:
        Sponsor links in first-seen order
    """
    if not raw:
        return []

    links: list[str] = []
    prefix_len = len(TELEGRAM_LINK_PREFIX)
    idx = raw.find(TELEGRAM_LINK_PREFIX)
    while idx != -1:
        end = raw.find(",", idx)
        next_prefix = raw.find(TELEGRAM_LINK_PREFIX, idx + prefix_len)
        if next_prefix != -1 and (end == -1 or next_prefix < end):
            end = next_prefix
        if end == -1:
            end = len(raw)
        item = raw[idx:end].strip()
        if item:
            links.append(item)
        idx = raw.find(TELEGRAM_LINK_PREFIX, end)

    if not links:
        links = [part.strip() for part in raw.split(",") if part.strip()]

    return list(dict.fromkeys(links))
