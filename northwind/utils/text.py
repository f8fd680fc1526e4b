"""Free-text search helpers."""

LIKE_ESCAPE = '\\'


def like_pattern(term: str) -> str:
    """Turn a search term into a substring LIKE pattern.

    LIKE wildcards in the term are escaped so they match literally.

    Examples:
        >>> like_pattern("50%_off")
        '%50\\\\%\\\\_off%'
    """
    escaped = (
        term.strip()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace('%', LIKE_ESCAPE + '%')
        .replace('_', LIKE_ESCAPE + '_')
    )
    return f"%{escaped}%"


def contains(column, term: str):
    """Case-insensitive substring match on ``column``."""
    return column.ilike(like_pattern(term), escape=LIKE_ESCAPE)
