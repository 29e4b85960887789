"""Default options and environment overrides for the groups finder."""
# [S:OPER v1] feature_flag=GROUPS_FINDER pass

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from .types import FinderOptions, SEED_EQUIVALENCE

ENV_PREFIX = "GROUPS_FINDER_"
GROUPS_FINDER_DEFAULTS: Dict[str, Any] = {
    "STORE_POSITIONS": True,
    "WALK_DIAGONALLY": True,
    "LIMIT_RESULTS_COUNT": 0,
    "MARK_REJECTED": False,
    "EQUIVALENCE": SEED_EQUIVALENCE,
}

_TRUE_VALUES = {"1", "true", "on", "yes"}
_FALSE_VALUES = {"0", "false", "off", "no"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{ENV_PREFIX}{name} must be a boolean flag, got {raw!r}")


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc


def _from_env(name: str, default: Any) -> Any:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None:
        return default
    if isinstance(default, bool):
        return _parse_bool(name, raw)
    if isinstance(default, int):
        return _parse_int(name, raw)
    return raw.strip().lower()


def build_options(overrides: Optional[Dict[str, Any]] = None) -> FinderOptions:
    """Return :class:`FinderOptions` from defaults, environment and ``overrides``.

    Override keys use the same upper-case names as ``GROUPS_FINDER_DEFAULTS``.
    """

    params = {name: _from_env(name, default) for name, default in GROUPS_FINDER_DEFAULTS.items()}
    if overrides:
        unknown = set(overrides) - set(GROUPS_FINDER_DEFAULTS)
        if unknown:
            raise ValueError(f"unknown option(s): {sorted(unknown)}")
        params.update(overrides)
    return FinderOptions(
        store_positions=bool(params["STORE_POSITIONS"]),
        walk_diagonally=bool(params["WALK_DIAGONALLY"]),
        limit_results_count=int(params["LIMIT_RESULTS_COUNT"]),
        mark_rejected=bool(params["MARK_REJECTED"]),
        equivalence=str(params["EQUIVALENCE"]),
    )


__all__ = ["ENV_PREFIX", "GROUPS_FINDER_DEFAULTS", "build_options"]
