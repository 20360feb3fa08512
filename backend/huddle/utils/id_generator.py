"""ID and join code generation utilities."""

import random
import string
import time

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def generate_id(prefix: str = "") -> str:
    """Generate a unique ID with optional prefix.

    Format: {prefix}_{timestamp_base36}{random_6chars}
    Example: ws_m1a2b3c4d5e6
    """
    timestamp = int(time.time() * 1000)
    timestamp_b36 = _to_base36(timestamp)
    random_part = "".join(random.choices(BASE36_ALPHABET, k=6))

    if prefix:
        return f"{prefix}_{timestamp_b36}{random_part}"
    return f"{timestamp_b36}{random_part}"


def generate_join_code(length: int = 6) -> str:
    """Generate a workspace join code.

    Each character is drawn independently and uniformly from [0-9a-z].
    Not cryptographically strong and not checked for collisions: a join
    code is a rotatable shared secret, not a key.
    """
    return "".join(random.choices(BASE36_ALPHABET, k=length))


def _to_base36(num: int) -> str:
    """Convert integer to base36 string."""
    if num == 0:
        return "0"

    result = []
    while num:
        result.append(BASE36_ALPHABET[num % 36])
        num //= 36

    return "".join(reversed(result))
