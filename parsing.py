"""Parsing module for maze configuration files.

This module validates and parses a maze config file into a `Config`.
It understands the DIMENSIONS, SEED, VIEW_AXES and VIEW_SIZE keys.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple


class ConfigError(ValueError):
    """Configuration and validation error."""

    pass


DEFAULT_VIEW_SIZE: Tuple[int, int] = (21, 41)

REQUIRED_KEYS = {"DIMENSIONS"}
ACCEPTABLE_KEYS = {"DIMENSIONS", "SEED", "VIEW_AXES", "VIEW_SIZE"}


@dataclass(frozen=True)
class Config:
    """Parsed configuration for maze generation."""

    dimensions: Tuple[int, ...]
    seed: Optional[int] = None
    view_axes: Tuple[int, int] = (0, 1)
    view_size: Tuple[int, int] = DEFAULT_VIEW_SIZE


def parse_int(value: str, *, key: str) -> int:
    """Parse an integer from a config value."""

    try:
        return int(value.strip())
    except ValueError as exc:
        msg = f"Invalid integer for {key}: {value!r}"
        raise ConfigError(msg) from exc


def parse_dimensions(value: str) -> List[int]:
    """Parse a comma separated list of sizes, e.g. "50, 40, 30".

    Every token must be a positive integer; empty tokens are rejected.
    """

    sizes: List[int] = []
    for token in value.split(","):
        token = token.strip()
        if not token:
            raise ConfigError(f"Empty dimension in {value!r}")
        size = parse_int(token, key="DIMENSIONS")
        if size <= 0:
            raise ConfigError(f"Dimension must be > 0: {token!r}")
        sizes.append(size)
    return sizes


def parse_pair(value: str, *, key: str) -> Tuple[int, int]:
    """Parse "a,b" into two integers."""

    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 2:
        raise ConfigError(
            f"Invalid value for {key}: {value!r} (expected 'a,b')"
        )
    return (parse_int(parts[0], key=key), parse_int(parts[1], key=key))


def read_config(path: Path) -> Config:
    """Read and validate the configuration file."""

    raw: Dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                stripped = line.split("#", 1)[0].strip()
                if not stripped:
                    continue
                if "=" not in stripped:
                    raise ConfigError(
                        f"Bad syntax at\n"
                        f"line {line_no}: {line!r} (expected KEY=VALUE)"
                    )
                k, v = stripped.split("=", 1)
                key = k.strip().upper()
                if key not in ACCEPTABLE_KEYS:
                    raise ConfigError(
                        f"Line {line_no}: Unknown configuration key '{key}'"
                    )
                raw[key] = v.strip()
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read"
                          f" config file: {path}: {exc}") from exc

    missing = sorted(REQUIRED_KEYS - set(raw.keys()))
    if missing:
        raise ConfigError(
            f"Missing required config keys: {', '.join(missing)}"
        )

    dimensions = tuple(parse_dimensions(raw["DIMENSIONS"]))

    seed: Optional[int] = None
    if "SEED" in raw:
        seed = parse_int(raw["SEED"], key="SEED")

    view_axes = (0, min(1, len(dimensions) - 1))
    if "VIEW_AXES" in raw:
        view_axes = parse_pair(raw["VIEW_AXES"], key="VIEW_AXES")
        for axis in view_axes:
            if not 0 <= axis < len(dimensions):
                raise ConfigError(
                    f"VIEW_AXES entry {axis} is not an axis of the maze"
                )

    view_size = DEFAULT_VIEW_SIZE
    if "VIEW_SIZE" in raw:
        view_size = parse_pair(raw["VIEW_SIZE"], key="VIEW_SIZE")
        if view_size[0] <= 0 or view_size[1] <= 0:
            raise ConfigError("VIEW_SIZE values must be > 0")

    return Config(
        dimensions=dimensions,
        seed=seed,
        view_axes=view_axes,
        view_size=view_size,
    )
