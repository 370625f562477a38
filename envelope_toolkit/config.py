"""
Toolkit settings loaded from the environment or a .env file.

Variables:
    ENVELOPE_TOOLKIT_RSA_BITS          RSA modulus for new key pairs (default 2048)
    ENVELOPE_TOOLKIT_KEY_SIZE          Symmetric key size in bytes (default 32)
    ENVELOPE_TOOLKIT_LOG_LEVEL         Level for configure_logging (default WARNING)
    ENVELOPE_TOOLKIT_BENCH_ITERATIONS  Benchmark iterations per case (default 200)
    ENVELOPE_TOOLKIT_BENCH_WORKERS     Benchmark concurrent workers (default 4)

Key material is never read from configuration.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .keys import AES_KEY_SIZES, RSA_MODULUS_BITS

ENV_PREFIX: Final[str] = "ENVELOPE_TOOLKIT_"

_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_MIN_RSA_BITS: Final[int] = 2048


def _int_setting(env: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ConfigError(f"{ENV_PREFIX}{name} must be at least {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class ToolkitSettings:
    """Immutable toolkit settings."""

    rsa_bits: int = RSA_MODULUS_BITS
    key_size: int = 32
    log_level: str = "WARNING"
    bench_iterations: int = 200
    bench_workers: int = 4

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_mapping(cls, env: Mapping[str, str]) -> ToolkitSettings:
        """
        Build settings from a mapping of environment variables.

        Raises:
            ConfigError: If a value is malformed or out of range
        """
        key_size = _int_setting(env, "KEY_SIZE", cls.key_size)
        if key_size not in AES_KEY_SIZES:
            raise ConfigError(
                f"{ENV_PREFIX}KEY_SIZE must be one of {AES_KEY_SIZES}, got {key_size}"
            )

        log_level = env.get(ENV_PREFIX + "LOG_LEVEL", cls.log_level).strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL must be one of {_LOG_LEVELS}, got {log_level!r}")

        return cls(
            rsa_bits=_int_setting(env, "RSA_BITS", cls.rsa_bits, minimum=_MIN_RSA_BITS),
            key_size=key_size,
            log_level=log_level,
            bench_iterations=_int_setting(env, "BENCH_ITERATIONS", cls.bench_iterations),
            bench_workers=_int_setting(env, "BENCH_WORKERS", cls.bench_workers),
        )

    @classmethod
    def from_env(cls, env_file: Optional[str | Path] = None) -> ToolkitSettings:
        """
        Load settings from os.environ after reading an optional .env file.

        Variables already set in the environment take precedence over the file.
        """
        load_dotenv(env_file)
        return cls.from_mapping(os.environ)
