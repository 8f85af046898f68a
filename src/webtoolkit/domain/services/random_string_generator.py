"""Random string generator service.

Generates random identifiers from a fixed 64-symbol alphabet using the
operating system's cryptographically secure random source.
"""

import secrets
import string


class RandomStringGenerator:
    """Generator for random strings used as collision-resistant file names.

    Each character is chosen independently and uniformly from
    ``ALPHABET`` (a-z, A-Z, 0-9, '_' and '+').

    Example strings: Qm3_xZ+a, 0bT9kL2w
    """

    ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits + "_+"

    @classmethod
    def generate(cls, length: int) -> str:
        """Generate a random string.

        Args:
            length: Number of characters to produce.

        Returns:
            A string of exactly ``length`` characters.

        Raises:
            ValueError: If length is negative.

        Examples:
            >>> len(RandomStringGenerator.generate(10))
            10
            >>> RandomStringGenerator.generate(0)
            ''
        """
        if length < 0:
            raise ValueError("Length must not be negative")
        return "".join(secrets.choice(cls.ALPHABET) for _ in range(length))
