from __future__ import annotations

from dataclasses import dataclass
import logging
import os

from dotenv import load_dotenv

from .sequence import TimestampedSequence
from .time_sources import get_time_source


def _getenv_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"Invalid int env var {name}={raw!r}") from e


def _getenv_optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if raw == "" or raw.lower() == "none":
        return None
    return _getenv_int(name, 0)


def _getenv_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "true" if default else "false").strip().lower()
    if raw in {"1", "true", "yes", "y", "on"}:
        return True
    if raw in {"0", "false", "no", "n", "off"}:
        return False
    raise RuntimeError(f"Invalid bool env var {name}={raw!r}")


@dataclass(frozen=True)
class Config:
    max_depth: int | None
    collapse_repeats: bool
    time_source: str

    log_level: str


def load_config() -> Config:
    # Load .env if present, but allow env vars to override.
    load_dotenv(override=False)

    max_depth = _getenv_optional_int("TSEQ_MAX_DEPTH")
    if max_depth is not None and max_depth <= 0:
        raise RuntimeError(f"TSEQ_MAX_DEPTH must be > 0, got {max_depth}")

    time_source = os.getenv("TSEQ_TIME_SOURCE", "milliseconds").strip()
    try:
        get_time_source(time_source)
    except ValueError as e:
        raise RuntimeError(f"Invalid TSEQ_TIME_SOURCE={time_source!r}") from e

    return Config(
        max_depth=max_depth,
        collapse_repeats=_getenv_bool("TSEQ_COLLAPSE_REPEATS", False),
        time_source=time_source,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def sequence_from_config(cfg: Config) -> TimestampedSequence:
    return TimestampedSequence(
        max_depth=cfg.max_depth,
        collapse_repeats=cfg.collapse_repeats,
        time_source=get_time_source(cfg.time_source),
    )
