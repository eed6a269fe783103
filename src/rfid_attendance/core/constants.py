"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_MINUTES = 0
DEFAULT_MAILBOX_TTL_SECONDS = 300
DEFAULT_LANGUAGE = "en"
MAILBOX_LOCK_STRIPES = 64
UNKNOWN_TENANT_NAME = "another school"
