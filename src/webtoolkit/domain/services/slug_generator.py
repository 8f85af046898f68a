"""Slug generator service.

Generates URL-friendly slugs from arbitrary text.
"""

import re

from webtoolkit.core.exceptions import ErrorKind, SlugError


class SlugGenerator:
    """Generate URL-friendly slugs.

    Slug rules:
    - Lowercase
    - Runs of characters outside a-z and 0-9 become a single hyphen
    - No leading or trailing hyphens

    Non-ASCII letters are not transliterated, so text written entirely in
    another script has no slug.
    """

    SEPARATOR_PATTERN = re.compile(r"[^a-z0-9]+")

    @classmethod
    def generate(cls, text: str) -> str:
        """Generate a slug from text.

        Args:
            text: The text to convert to a slug.

        Returns:
            URL-friendly slug.

        Raises:
            SlugError: With kind EMPTY_INPUT if text is empty, or EMPTY_RESULT
                if no characters survive normalization.

        Examples:
            >>> SlugGenerator.generate("now is the time")
            'now-is-the-time'
            >>> SlugGenerator.generate("Test & Company, Inc.")
            'test-company-inc'
        """
        if not text:
            raise SlugError("empty string not permitted", ErrorKind.EMPTY_INPUT)

        slug = cls.SEPARATOR_PATTERN.sub("-", text.lower()).strip("-")
        if not slug:
            raise SlugError("after removing characters slug is 0 length", ErrorKind.EMPTY_RESULT)

        return slug
