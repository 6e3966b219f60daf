"""Link request input value object."""

import re
from dataclasses import dataclass
from enum import Enum

STARS_PATTERN = re.compile(r"\d+", re.ASCII)
NFT_URL_PATTERN = re.compile(
    r"(https?://)[\w.-]+(?:/[\w\-._~:/?#\[\]@!$&'()*+,;=.]+)?",
    re.ASCII | re.IGNORECASE,
)


class RequestType(str, Enum):
    """Kind of asset a link request refers to."""

    STARS = "stars"
    NFT = "nft"


class InvalidRequestInputError(ValueError):
    """Raised when free text is neither a positive star count nor an NFT URL."""

    NON_POSITIVE_STARS = "non_positive_stars"
    UNRECOGNIZED = "unrecognized"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass(frozen=True)
class RequestInput:
    """Classified owner input: a star count or an NFT URL."""

    request_type: RequestType
    value: str

    @classmethod
    def parse(cls, text: str) -> "RequestInput":
        """
        Classify and validate free text.

        Args:
            text: Raw message text

        Returns:
            RequestInput with normalized value

        Raises:
            InvalidRequestInputError: If the text is not a positive number or an http(s) URL
        """
        text = (text or "").strip()

        if STARS_PATTERN.fullmatch(text):
            stars = int(text)
            if stars <= 0:
                raise InvalidRequestInputError(InvalidRequestInputError.NON_POSITIVE_STARS)
            return cls(request_type=RequestType.STARS, value=str(stars))

        if NFT_URL_PATTERN.fullmatch(text):
            return cls(request_type=RequestType.NFT, value=text)

        raise InvalidRequestInputError(InvalidRequestInputError.UNRECOGNIZED)
