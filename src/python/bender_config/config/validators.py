"""
Field validators for renderfarm configuration values.

Each validator takes the dotted key and a candidate value and either returns
None or raises ValidationError. Validators never coerce: the value stored in a
Config is exactly the value that was validated.
"""

import ipaddress
import re
from typing import Callable, Iterable

from bender_config.errors import ValidationError

Validator = Callable[[str, object], None]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# RFC 1123 label: alphanumerics and hyphens, no leading/trailing hyphen
_HOSTNAME_LABEL = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def integer(minimum: int, maximum: int) -> Validator:
    """Build a validator accepting ints in the closed range [minimum, maximum].

    Booleans are rejected even though bool is a subclass of int.
    """
    def check(key: str, value: object) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(key, value, "expected an integer")
        if not minimum <= value <= maximum:
            raise ValidationError(key, value, f"must be between {minimum} and {maximum}")

    return check


def path(key: str, value: object) -> None:
    if not isinstance(value, str):
        raise ValidationError(key, value, "expected a path string")
    if not value.strip():
        raise ValidationError(key, value, "path must not be empty")
    if "\x00" in value:
        raise ValidationError(key, value, "path must not contain NUL characters")


def host(key: str, value: object) -> None:
    """Accept an IP address literal or an RFC 1123 hostname."""
    if not isinstance(value, str):
        raise ValidationError(key, value, "expected a host name or address")
    try:
        ipaddress.ip_address(value)
        return
    except ValueError:
        pass

    name = value[:-1] if value.endswith(".") else value
    if not name or len(name) > 253:
        raise ValidationError(key, value, "malformed host name")
    labels = name.split(".")
    if not all(_HOSTNAME_LABEL.match(label) for label in labels):
        raise ValidationError(key, value, "malformed host name")
    # An all-numeric dotted name is a broken IPv4 address, not a hostname
    if labels[-1].isdigit():
        raise ValidationError(key, value, "malformed IP address")


def choice(options: Iterable[str]) -> Validator:
    options = tuple(options)

    def check(key: str, value: object) -> None:
        if not isinstance(value, str) or value not in options:
            raise ValidationError(key, value, f"must be one of {', '.join(options)}")

    return check
