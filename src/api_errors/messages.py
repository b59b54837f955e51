"""Message keys understood by the external message catalog.

Keys are opaque identifiers; the localized text lives elsewhere.
"""

from enum import StrEnum


class MessageKey(StrEnum):
    UPSTREAM_ERROR = "E01-01-0001"
    TIMEOUT = "E01-01-0002"
    VALIDATION_FAILURE = "E01-01-0003"
    GENERIC_CLIENT_ERROR = "E01-01-0004"
    GENERIC_SERVER_ERROR = "E01-01-0005"
