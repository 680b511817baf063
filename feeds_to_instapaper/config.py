from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigError

DEFAULT_CONFIG_FILE = "config.yaml"
DEFAULT_LINKS_LOG_FILE = "links.log"


@dataclass
class Config:
    username: str
    password: str
    links_log_file: Path
    feeds: List[str] = field(default_factory=list)
    auto_add: bool = False
    skip_download_errors: bool = False
    timeout_sec: float = 30.0


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"config file not found: {path}") from e
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")
    return data


def _feeds(raw: Any, path: Path) -> List[str]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(u, str) for u in raw):
        raise ConfigError(f"{path}: 'feeds' must be a list of URLs")
    return [u.strip() for u in raw if u.strip()]


def load_config(
    path: Union[str, os.PathLike] = DEFAULT_CONFIG_FILE,
    *,
    env_file: Optional[str] = None,
    require_credentials: bool = True,
) -> Config:
    """
    Load the YAML config file, letting the environment override credentials.

    INSTAPAPER_USERNAME, INSTAPAPER_PASSWORD and LINKS_LOG_FILE take precedence
    over the file. They are also read from `env_file`, or from the nearest .env
    above the working directory. A relative links log path is
    resolved against the directory of the config file.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))
    path = Path(path)
    data = _read_yaml(path)

    account = data.get("instapaper") or {}
    if not isinstance(account, dict):
        raise ConfigError(f"{path}: 'instapaper' must be a mapping")
    username = os.getenv("INSTAPAPER_USERNAME") or account.get("username")
    password = os.getenv("INSTAPAPER_PASSWORD") or account.get("password")
    if require_credentials and (not username or not password):
        raise ConfigError("Instapaper username/password not set (config file or INSTAPAPER_USERNAME/INSTAPAPER_PASSWORD)")

    log_file = Path(os.getenv("LINKS_LOG_FILE") or data.get("links_log_file") or DEFAULT_LINKS_LOG_FILE)
    if not log_file.is_absolute():
        log_file = path.parent / log_file

    timeout = data.get("timeout_sec", 30.0)
    if not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"{path}: 'timeout_sec' must be a positive number")

    return Config(
        username=str(username or ""),
        password=str(password or ""),
        links_log_file=log_file,
        feeds=_feeds(data.get("feeds"), path),
        timeout_sec=float(timeout),
    )
