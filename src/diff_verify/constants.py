"""Project-wide conventions for staged files and status-line formatting.

Update here to change the backup naming or the look of the console log.
"""

# Suffix appended to a target file while it is staged aside.
BACKUP_SUFFIX = ".tmp"

# Status-line prefixes, in the order a full run emits them.
RENAME = "rename"
EMIT = "emit"
DIFF = "diff"
DELETE = "delete"
ERROR = "error"
INFO = "info"

PREFIX_COLORS = {
    RENAME: "blue",
    EMIT: "yellow",
    DIFF: "green",
    DELETE: "magenta",
    ERROR: "red",
}

# Width of the bracketed "[prefix]" column before the message starts.
PREFIX_WIDTH = 10

__all__ = [
    "BACKUP_SUFFIX",
    "RENAME",
    "EMIT",
    "DIFF",
    "DELETE",
    "ERROR",
    "INFO",
    "PREFIX_COLORS",
    "PREFIX_WIDTH",
]
