"""Token generator port."""

from abc import ABC, abstractmethod


class TokenGenerator(ABC):
    """Port interface for request token generation."""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a new random token.

        Returns:
            Token string; uniqueness is not guaranteed
        """
        pass
