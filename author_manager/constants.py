"""
Application-level constants for hardcoded business logic.

These values represent core author-management behavior and should NEVER be
changed via environment variables or configuration.

For configurable values (database, logging, etc.), see
author_manager/settings.py where values can be overridden via environment
variables.
"""

from enum import StrEnum

# ============================================================================
# Author identities
# ============================================================================

# Id carried by author data that has not been persisted yet
NEW_AUTHOR_ID = 0

# The primary author: can never be deleted and inherits the posts of
# every deleted author
PROTECTED_AUTHOR_ID = 1

# Name given to the protected author when a fresh database is seeded
MAIN_AUTHOR_NAME = "Admin"


# ============================================================================
# Result message codes
# ============================================================================


class AuthorMessage(StrEnum):
    """Message codes carried by author lifecycle results."""

    ADDED = "author-added"
    UPDATED = "author-updated"
    DELETED = "author-deleted"
    EMPTY_NAME = "author-empty-name"
    DUPLICATE_NAME = "author-duplicate-name"
    DUPLICATE_USERNAME = "author-duplicate-username"
    CANNOT_DELETE_MAIN_AUTHOR = "cannot-delete-main-author"

