"""
Process-wide settings read by vectors and statistics.

Values resolve in this order: explicit override > environment variable >
built-in default. A single shared `Settings` object is used by every
vector that was not given its own; `configure()` changes it in place and
the change applies to every recomputation that happens afterwards.
Nodes that are already clean keep their cached value until their data
changes again.
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

import numpy as np

# --- Built-in defaults ---
DEFAULT_UNBIAS = False   # population statistics (divide by N)
DEFAULT_NOFILL = False   # zero-pad vectors when they grow
DEFAULT_TOLERANCE = None # exact equality
DEFAULT_DEBUG = 0
DEFAULT_IPRES = 2        # digits after the decimal point in as_string()

# Environment variable consulted for each field
ENV_VARS = {
    "unbias": "UNBIAS",
    "nofill": "NOFILL",
    "tolerance": "TOLER",
    "debug": "DEBUG",
    "ipres": "IPRES",
}

_FALSE_STRINGS = {"", "0", "false", "no", "off"}


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in _FALSE_STRINGS


def _env_tolerance(value: str) -> Optional[float]:
    try:
        return float(value.strip())
    except ValueError:
        return None


def _env_debug(value: str) -> int:
    # non-numeric values are read as an on/off flag
    try:
        return int(value.strip())
    except ValueError:
        return int(_env_flag(value))


def _env_ipres(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return DEFAULT_IPRES


_PARSERS = {
    "unbias": _env_flag,
    "nofill": _env_flag,
    "tolerance": _env_tolerance,
    "debug": _env_debug,
    "ipres": _env_ipres,
}


@dataclass
class Settings:
    """
    Runtime flags.

    Attributes:
        unbias: Divide variance/covariance by N-1 instead of N.
        nofill: Pad growing vectors with missing entries instead of zeros.
        tolerance: When set, `close_enough` treats values within this
            absolute distance as equal.
        debug: Verbosity of the debug log messages (0 = silent).
        ipres: Display precision used by `as_string()`.
    """
    unbias: bool = DEFAULT_UNBIAS
    nofill: bool = DEFAULT_NOFILL
    tolerance: Optional[float] = DEFAULT_TOLERANCE
    debug: int = DEFAULT_DEBUG
    ipres: int = DEFAULT_IPRES

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Settings":
        """Builds settings from `environ` (default `os.environ`) and explicit overrides."""
        if environ is None:
            environ = os.environ
        values = {}
        for name, var in ENV_VARS.items():
            if var in environ:
                values[name] = _PARSERS[name](environ[var])
        values.update(overrides)
        return cls(**values)

    def with_overrides(self, **overrides) -> "Settings":
        return replace(self, **overrides)


settings = Settings.from_env()


def get_settings() -> Settings:
    return settings


def configure(**overrides) -> Settings:
    """
    Changes the shared settings in place.

    Unknown names raise TypeError. Returns the shared object.
    """
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise TypeError(f"unknown setting(s): {unknown}")
    for name, value in overrides.items():
        setattr(settings, name, value)
    return settings


def reset_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Reloads the shared settings from the environment, dropping overrides."""
    fresh = Settings.from_env(environ)
    for f in fields(Settings):
        setattr(settings, f.name, getattr(fresh, f.name))
    return settings


def close_enough(a: float, b: float, tolerance: Optional[float] = None) -> bool:
    """Equality that honours the configured tolerance."""
    if tolerance is None:
        tolerance = settings.tolerance
    if tolerance is None:
        return a == b
    return bool(np.isclose(a, b, rtol=0.0, atol=tolerance))
