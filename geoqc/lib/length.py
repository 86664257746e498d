"""Length text codec.

Standard tables declare field widths as text: ``"50"`` for a plain width or
``"9,2"`` for precision and scale. Malformed text degrades to ``(0, 0)``,
meaning no length constraint, instead of raising.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

__all__ = ["parse_length", "render_length"]


def _non_negative_int(text: str) -> Optional[int]:
    value = text.strip()
    if not value or not value.isascii() or not value.isdigit():
        return None
    return int(value)


def parse_length(text: Optional[str]) -> Tuple[int, int]:
    """Parse length text into ``(precision, scale)``.

    Args:
        text: Declared length such as ``"50"`` or ``"9,2"``

    Returns:
        Tuple of precision and scale; ``(0, 0)`` for empty or malformed text

    Example:
        >>> parse_length("9,2")
        (9, 2)
        >>> parse_length("abc")
        (0, 0)
    """
    if text is None or not str(text).strip():
        return (0, 0)

    text = str(text)
    if "," in text:
        parts = text.split(",")
        if len(parts) == 2:
            precision = _non_negative_int(parts[0])
            scale = _non_negative_int(parts[1])
            if precision is not None and scale is not None:
                return (precision, scale)
    else:
        precision = _non_negative_int(text)
        if precision is not None:
            return (precision, 0)

    logger.debug("Unparsable length text %r treated as no constraint", text)
    return (0, 0)


def render_length(precision: int, scale: int = 0) -> str:
    """Render ``(precision, scale)`` the way standards declare lengths.

    A zero scale is dropped, so ``render_length(9, 0)`` is ``"9"``.
    """
    if scale > 0:
        return f"{precision},{scale}"
    return str(precision)
