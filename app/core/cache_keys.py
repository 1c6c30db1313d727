"""Cache-key derivation for dataset queries."""

from collections.abc import Sequence

# Stands in for an absent optional filter. A literal filter value of "all"
# therefore maps to the same key as no filter at all.
ABSENT_FILTER = "all"

_SEPARATOR = "_"


def _escape(part: str) -> str:
    # Keep component boundaries unambiguous when values contain the separator.
    return part.replace("%", "%25").replace(_SEPARATOR, "%5F")


def derive_cache_key(
    resource: str,
    limit: str | int,
    offset: str | int,
    filters: Sequence[str | None] = (),
) -> str:
    """Build the canonical key for a dataset page.

    ``filters`` is positional: callers must always pass the same filters in
    the same order for a given resource. Empty strings count as absent.

    >>> derive_cache_key("receitas", 10, 0, [None, "educacao"])
    'receitas_10_0_all_educacao'
    """
    parts = [resource, str(limit), str(offset)]
    parts.extend(f if f else ABSENT_FILTER for f in filters)
    return _SEPARATOR.join(_escape(p) for p in parts)
