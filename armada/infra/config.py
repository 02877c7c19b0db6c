"""Application configuration and env loading."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from armada.core.models import AttackMode
from armada.core.placement import DEFAULT_MAX_ATTEMPTS, DEFAULT_MAX_FLEET_RETRIES

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 2000


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable gameplay tuning read from the environment."""

    placement_max_attempts: int = DEFAULT_MAX_ATTEMPTS
    fleet_max_retries: int = DEFAULT_MAX_FLEET_RETRIES
    attack_mode: AttackMode = AttackMode.SINGLE
    max_turns: int = DEFAULT_MAX_TURNS
    seed: int | None = None


def load_game_config() -> GameConfig:
    """Load gameplay configuration from ARMADA_* env vars."""
    return GameConfig(
        placement_max_attempts=_positive_int("ARMADA_PLACEMENT_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS),
        fleet_max_retries=_positive_int("ARMADA_FLEET_MAX_RETRIES", DEFAULT_MAX_FLEET_RETRIES),
        attack_mode=_attack_mode("ARMADA_ATTACK_MODE"),
        max_turns=_positive_int("ARMADA_MAX_TURNS", DEFAULT_MAX_TURNS),
        seed=_optional_int("ARMADA_SEED"),
    )


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = Path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files left to right; later files win.

    Default order: appdata/config/.env, appdata/config/.env.local, .env, .env.local.
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env",
            "appdata/config/.env.local",
            ".env",
            ".env.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("config_invalid_int name=%s value=%r", name, raw)
        return None


def _positive_int(name: str, default: int) -> int:
    value = _optional_int(name)
    if value is None or value <= 0:
        return default
    return value


def _attack_mode(name: str) -> AttackMode:
    raw = os.getenv(name, "").strip().upper()
    if not raw:
        return AttackMode.SINGLE
    try:
        return AttackMode(raw)
    except ValueError:
        logger.warning("config_invalid_attack_mode value=%r", raw)
        return AttackMode.SINGLE
