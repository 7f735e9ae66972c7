from __future__ import annotations

import hashlib

__all__ = ["parse_int", "derive_seed_value"]


def parse_int(value: int | str, *, base: int = 0) -> int:
    """Parse *value* into an integer.

    Strings honour ``base``; the default of ``0`` lets Python auto-detect
    prefixes such as ``0x``. Raises :class:`ValueError` for anything that is
    not integer-like.
    """

    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported type for integer parsing: {type(value)!r}")
    try:
        return int(value.strip(), base)
    except ValueError as exc:
        raise ValueError(f"Invalid integer literal: {value!r}") from exc


def derive_seed_value(*parts: object, bits: int = 64) -> int:
    """Return a stable integer derived from *parts*.

    The parts are joined with ``"::"`` and hashed with SHA-256; the digest
    is truncated to ``bits`` so the result can seed ``random.Random``.
    """

    joined = "::".join("" if part is None else str(part) for part in parts)
    digest = hashlib.sha256(joined.encode("utf-8")).digest()
    width = max(8, bits // 8)
    return int.from_bytes(digest[:width], "big", signed=False)
