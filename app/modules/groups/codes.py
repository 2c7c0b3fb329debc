"""Join codes for workshop groups."""
import secrets
import string
from typing import Callable, Optional, Set

CODE_ALPHABET = string.ascii_uppercase + string.digits


class GroupCodeExhaustedError(RuntimeError):
    """Raised when no unused code was found within the allowed attempts."""


def generate_group_code(length: int = 6) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_unique_code(
    exists: Callable[[str], bool],
    length: int = 6,
    max_attempts: int = 5,
    reserved: Optional[Set[str]] = None,
) -> str:
    """Draw codes until one is neither taken in storage nor in `reserved`."""
    reserved = reserved or set()
    for _ in range(max_attempts):
        code = generate_group_code(length)
        if code in reserved or exists(code):
            continue
        return code
    raise GroupCodeExhaustedError(f"No free group code after {max_attempts} attempts")
