"""Read ``ESARROW_*`` overrides from the process environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)


def env_value(name: str) -> str | None:
    """Return the stripped value of ``name``; blank or unset gives None."""
    raw = os.environ.get(name)
    if raw is None:
        return None
    return raw.strip() or None


N = TypeVar("N", int, float)


def _env_number(
    name: str,
    parse: Callable[[str], N],
    default: N | None,
) -> N | None:
    raw = env_value(name)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError:
        logger.warning("Invalid %s for %s: %r; keeping %r.", parse.__name__, name, raw, default)
        return default


def env_int(name: str, *, default: int | None = None) -> int | None:
    """Parse ``name`` as an integer such as ``ESARROW_SAMPLE_SIZE``.

    Returns
    -------
    int | None
        Parsed value, or ``default`` when unset or unparsable.
    """
    return _env_number(name, int, default)


def env_float(name: str, *, default: float | None = None) -> float | None:
    """Parse ``name`` as a float such as ``ESARROW_LIST_PROBABILITY``.

    Returns
    -------
    float | None
        Parsed value, or ``default`` when unset or unparsable.
    """
    return _env_number(name, float, default)


__all__ = ["env_float", "env_int", "env_value"]
