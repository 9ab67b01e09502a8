"""Configuration helpers for the crypto server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

_DEFAULT_SERVER_CONFIG = Path(__file__).resolve().parent / "server.yaml"


class ConfigError(ValueError):
    """Raised when required configuration is missing or malformed."""


@dataclass(frozen=True)
class ListenConfig:
    host: str
    port: int


@dataclass(frozen=True)
class SigningConfig:
    secret: str
    algorithm: str = "sha256"

    def __repr__(self) -> str:
        return f"SigningConfig(secret='***', algorithm={self.algorithm!r})"


@dataclass(frozen=True)
class EncodingConfig:
    algorithm: str = "base64"


@dataclass(frozen=True)
class ServerConfig:
    listen: ListenConfig
    signing: SigningConfig
    encoding: EncodingConfig
    log_level: str = "INFO"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    data = yaml.safe_load(path.read_text()) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file must contain a mapping: {path}")
    return data


def build_server_config(
    data: Mapping[str, Any], environ: Mapping[str, str] | None = None
) -> ServerConfig:
    """Merge YAML data with environment overrides. Environment wins."""
    env = os.environ if environ is None else environ
    listen = data.get("listen") or {}
    signing = data.get("signing") or {}
    encoding = data.get("encoding") or {}
    logging_cfg = data.get("logging") or {}

    secret = env.get("HMAC_SECRET") or signing.get("secret") or ""
    if not secret:
        raise ConfigError("HMAC_SECRET environment variable is required")
    try:
        port = int(env.get("PORT") or listen.get("port", 3000))
    except (TypeError, ValueError) as exc:
        raise ConfigError("listen port must be an integer") from exc

    return ServerConfig(
        listen=ListenConfig(
            host=str(env.get("HOST") or listen.get("host", "0.0.0.0")),
            port=port,
        ),
        signing=SigningConfig(
            secret=str(secret),
            algorithm=str(env.get("HMAC_ALGORITHM") or signing.get("algorithm", "sha256")),
        ),
        encoding=EncodingConfig(algorithm=str(encoding.get("algorithm", "base64"))),
        log_level=str(env.get("LOG_LEVEL") or logging_cfg.get("level", "INFO")).upper(),
    )


@lru_cache(maxsize=1)
def get_server_config() -> ServerConfig:
    load_dotenv()
    path = Path(os.getenv("CRYPTO_SERVER_CONFIG_PATH", _DEFAULT_SERVER_CONFIG))
    return build_server_config(_load_yaml(path))
