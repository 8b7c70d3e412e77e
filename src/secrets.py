from __future__ import annotations
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from google.cloud import secretmanager


_REPO_ROOT = Path(__file__).resolve().parents[1]
_SECRETS_DIR = _REPO_ROOT / "secrets"

SOURCE_ENV = "env"
SOURCE_SECRET_MANAGER = "secret-manager"
SOURCE_DEFAULT = "default"
SOURCE_MISSING = "missing"


def env_file_path(env: str) -> Path:
    return _SECRETS_DIR / f"env.{env}"


def setup_secrets(env: str) -> Optional[Path]:
    """
    Cloud Run hands the whole dotenv file over in ENV_FILE; write it to
    secrets/env.<env> so the launcher can load it. An existing file wins.
    """
    payload = os.environ.get("ENV_FILE")
    if not payload:
        return None
    target = env_file_path(env)
    if not target.exists():
        _SECRETS_DIR.mkdir(parents=True, exist_ok=True)
        target.write_text(payload, encoding="utf-8")
    return target


@lru_cache(maxsize=1)
def _sm_client() -> secretmanager.SecretManagerServiceClient:
    return secretmanager.SecretManagerServiceClient()


@lru_cache(maxsize=64)
def _sm_get(resource: str) -> str:
    """Retrieve a secret value from Google Cloud Secret Manager."""
    resp = _sm_client().access_secret_version(name=resource)
    return resp.payload.data.decode("utf-8")


def secret_source(name: str, default: Optional[str] = None) -> str:
    """Where `get_secret(name, default)` would read from, without reading a Secret Manager value."""
    if os.getenv(name) is not None:
        return SOURCE_ENV
    if os.getenv(f"{name}_RESOURCE"):
        return SOURCE_SECRET_MANAGER
    if default is not None:
        return SOURCE_DEFAULT
    return SOURCE_MISSING


def get_secret(name: str, default: Optional[str] = None) -> str:
    """
    Resolution order:
      1) NAME (env/.env)
      2) NAME_RESOURCE (Secret Manager resource path)
      3) default, else raise RuntimeError
    """
    source = secret_source(name, default)
    if source == SOURCE_ENV:
        return os.environ[name]
    if source == SOURCE_SECRET_MANAGER:
        return _sm_get(os.environ[f"{name}_RESOURCE"])
    if source == SOURCE_DEFAULT:
        return default
    raise RuntimeError(f"Missing {name} (or {name}_RESOURCE)")
