"""Random alphanumeric token generator adapter."""

import random
import secrets
import string
from typing import Optional

from linkbot.application.ports.token_generator import TokenGenerator

TOKEN_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
TOKEN_LENGTH = 14


class RandomTokenGenerator(TokenGenerator):
    """Draws tokens uniformly, with replacement, from a 62-character alphabet."""

    def __init__(self, length: int = TOKEN_LENGTH, rng: Optional[random.Random] = None) -> None:
        """
        Initialize token generator.

        Args:
            length: Token length
            rng: Random source (defaults to the OS CSPRNG); pass a seeded
                random.Random for reproducible tokens
        """
        if length <= 0:
            raise ValueError("Token length must be positive")
        self._length = length
        self._rng = rng or secrets.SystemRandom()

    def generate(self) -> str:
        """
        Generate a new random token.

        Returns:
            Token string of the configured length
        """
        return "".join(self._rng.choice(TOKEN_ALPHABET) for _ in range(self._length))


def is_well_formed_token(token: str, length: int = TOKEN_LENGTH) -> bool:
    """
    Check that a string could have been issued by RandomTokenGenerator.

    Args:
        token: Candidate token from a URL path
        length: Expected token length

    Returns:
        True if the token has the right length and alphabet
    """
    return len(token) == length and all(ch in TOKEN_ALPHABET for ch in token)
