import math
import random
import re
import time
import uuid
from pathlib import PurePosixPath

_INT_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))")
_EXTENSION = re.compile(r"\.[A-Za-z0-9]+")


def generate_id():
    return str(uuid.uuid4())


def is_valid_game_id(value):
    """True only for canonical uuid strings, so an id never escapes the games root."""
    try:
        return str(uuid.UUID(value)) == value
    except (ValueError, TypeError, AttributeError):
        return False


def file_extension(filename):
    """Suffix of the uploaded file's own name (".png"), or "" if it is missing or unsafe."""
    suffix = PurePosixPath((filename or "").replace("\\", "/")).suffix
    return suffix if _EXTENSION.fullmatch(suffix) else ""


def generate_upload_name(original_filename):
    """Storage name for an upload: epoch millis, a random integer and the original extension."""
    millis = int(time.time() * 1000)
    return f"{millis}-{random.randint(0, 10**9)}{file_extension(original_filename)}"


def public_game_path(game_id, filename):
    return f"/games/{game_id}/{filename}"


def parse_int_prefix(value, default=0):
    """Parse the leading integer of a value like JavaScript's parseInt.

    "12abc" -> 12, "0x1A" -> 26, anything without leading digits -> default.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if value is None:
        return default
    match = _INT_PREFIX.match(str(value))
    if not match:
        return default
    sign, hex_digits, digits = match.groups()
    number = int(hex_digits, 16) if hex_digits else int(digits)
    return -number if sign == "-" else number
