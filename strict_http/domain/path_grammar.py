"""Request path grammar check.

Accepted paths are ``/`` alone or ``/`` followed by one or more segments made
of ASCII letters, digits, ``_`` and ``-``, joined by single slashes.
"""

import string

SEGMENT_CHARACTERS = frozenset(string.ascii_letters + string.digits + "_-")


def is_valid_path(path: str) -> bool:
    """Return True when the path matches the segment grammar."""
    if not path.startswith("/"):
        return False
    if path == "/":
        return True

    segment_length = 0
    for character in path[1:]:
        if character == "/":
            if segment_length == 0:
                return False
            segment_length = 0
        elif character in SEGMENT_CHARACTERS:
            segment_length += 1
        else:
            return False
    return segment_length > 0
