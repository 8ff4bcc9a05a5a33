"""Storage names and the public references derived from them."""

import re
import uuid

# Longer extensions are treated as none; keeps generated names well under NAME_MAX
MAX_EXTENSION_LENGTH = 16
_EXTENSION_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def is_valid_storage_name(name: str) -> bool:
    """True if name is a single path component that stays inside the root.

    Dot-prefixed names are reserved for in-flight temporary files.
    """
    if not name or name in (".", ".."):
        return False
    if name.startswith("."):
        return False
    return not any(sep in name for sep in ("/", "\\", "\x00"))


def encode_reference(public_folder: str, name: str) -> str:
    """Build the reference for a storage name: /<public_folder>/<name>."""
    return f"/{public_folder}/{name}"


def decode_reference(public_folder: str, reference: str) -> str | None:
    """Recover the storage name from a reference, or None if it is not one of ours."""
    prefix = f"/{public_folder}/"
    if not reference.startswith(prefix):
        return None
    name = reference.removeprefix(prefix)
    if not is_valid_storage_name(name):
        return None
    return name


def split_extension(declared_name: str) -> str:
    """
    Extension of a client-declared filename: text after the final dot, case kept.
    Only the last path segment is looked at; anything that is not a plain
    alphanumeric extension of at most MAX_EXTENSION_LENGTH characters counts
    as no extension.
    """
    base = re.split(r"[/\\]", declared_name)[-1]
    _, dot, ext = base.rpartition(".")
    if not dot or len(ext) > MAX_EXTENSION_LENGTH or not _EXTENSION_RE.match(ext):
        return ""
    return ext


def generate_storage_name(extension: str) -> str:
    """Fresh uuid4 storage name, e.g. 3f2b...-....png."""
    unique_id = str(uuid.uuid4())
    if extension:
        return f"{unique_id}.{extension}"
    return unique_id
