"""
Constants for mongo-models.

Shared defaults and field names, kept in one place to avoid magic values.
"""

from typing import Final

# ============================================================================
# CONNECTION CONSTANTS
# ============================================================================

DEFAULT_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 5000
"""Default server selection timeout in milliseconds."""

MIN_SERVER_SELECTION_TIMEOUT_MS: Final[int] = 1000
"""Lowest accepted server selection timeout in milliseconds."""

DEFAULT_APP_NAME: Final[str] = "mongo-models"
"""Application name reported to the server."""

# ============================================================================
# DOCUMENT CONSTANTS
# ============================================================================

ID_FIELD: Final[str] = "_id"
"""Identity field of every document."""

MUTATION_VALUE_FIELD: Final[str] = "value"
"""Field carrying the applied document in a find-and-modify response."""

WRITE_OPS_FIELD: Final[str] = "ops"
"""Field carrying the inserted documents in a write response."""

# ============================================================================
# QUERY SHORTHAND CONSTANTS
# ============================================================================

EXCLUDE_PREFIX: Final[str] = "-"
"""Shorthand prefix marking an excluded field or descending sort."""

ASCENDING: Final[int] = 1
"""Ascending sort direction."""

DESCENDING: Final[int] = -1
"""Descending sort direction."""
