"""
Projection and sort shorthand.

Both adapters accept either a mapping, which is returned unchanged, or a
whitespace-delimited string where a leading "-" excludes a field (for
projections) or sorts it descending (for sorts):

    fields_adapter("name -password")  # {"name": True, "password": False}
    sort_adapter("-created_at name")  # {"created_at": -1, "name": 1}
"""

from typing import Any

from .constants import ASCENDING, DESCENDING, EXCLUDE_PREFIX


def _split_shorthand(spec: str) -> list[tuple[str, bool]]:
    """Split shorthand into (field, negated) pairs, skipping empty tokens."""
    pairs = []
    for token in spec.split():
        if token.startswith(EXCLUDE_PREFIX):
            pairs.append((token[len(EXCLUDE_PREFIX) :], True))
        else:
            pairs.append((token, False))
    return pairs


def fields_adapter(fields: Any) -> Any:
    """
    Convert projection shorthand to a projection mapping.

    Args:
        fields: Shorthand string, mapping or None

    Returns:
        ``{field: bool}`` for strings, the input unchanged otherwise
    """
    if not isinstance(fields, str):
        return fields
    return {field: not excluded for field, excluded in _split_shorthand(fields)}


def sort_adapter(sorts: Any) -> Any:
    """
    Convert sort shorthand to a sort mapping.

    Args:
        sorts: Shorthand string, mapping or None

    Returns:
        ``{field: 1 | -1}`` for strings, the input unchanged otherwise
    """
    if not isinstance(sorts, str):
        return sorts
    return {
        field: DESCENDING if descending else ASCENDING
        for field, descending in _split_shorthand(sorts)
    }
