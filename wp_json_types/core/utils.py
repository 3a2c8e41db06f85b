"""Shared string helpers for identifiers and filenames."""


def upper_first(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return text[:1].upper() + text[1:]


def capitalize(text: str) -> str:
    """Upper-case the first character and lower-case the rest."""
    return text[:1].upper() + text[1:].lower()


def snake_to_pascal(text: str) -> str:
    """Convert ``snake_case`` (optionally with ``/`` parts) to PascalCase.

    Every ``_``-separated word and every ``/``-separated part within a word
    gets its first letter upper-cased; the slashes themselves are kept.

    >>> snake_to_pascal("comment_status")
    'CommentStatus'
    """
    return "".join(
        upper_first("/".join(upper_first(part) for part in word.split("/")))
        for word in text.split("_")
    )


def resource_slug(title: str) -> str:
    """Filename-safe resource name derived from a schema title (``wp_post`` -> ``wp-post``)."""
    return title.replace("wp_", "wp-", 1)


def resource_type_name(title: str) -> str:
    """Type identifier for a schema title (``wp_post`` -> ``WpPost``)."""
    return "Wp" + capitalize(resource_slug(title).replace("wp-", "", 1))
