"""Configuration module — frozen dataclass loaded from env vars and an optional YAML file."""

import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    log_path: str = "errors.log"
    encoding: str = "utf-8"
    create_dirs: bool = False
    capture_stderr: bool = False
    stderr_level: str | None = None  # None = captured text written verbatim
    capture_fd: bool = False


CONFIG_PATH_ENV = "ERRLOG_CONFIG"


def load_yaml_config(path: str | None) -> dict:
    """Read logger settings from a YAML mapping.

    A missing *path* or file means no file settings. A file whose top level
    is not a mapping raises ValueError.
    """
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("errlog config %s not found, using env and defaults", path)
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"errlog config {path} must be a mapping of settings, got {type(data).__name__}"
        )
    logger.debug("Read errlog settings %s from %s", sorted(data), path)
    return data


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from env vars, falling back to *yaml_data*, then defaults."""
    yaml_data = yaml_data or {}

    def _get(env_key, yaml_key, default):
        value = os.environ.get(env_key)
        if value is not None:
            return value
        return yaml_data.get(yaml_key, default)

    stderr_level = _get("ERRLOG_STDERR_LEVEL", "stderr_level", Config.stderr_level)
    if stderr_level is not None:
        stderr_level = str(stderr_level).strip() or None

    return Config(
        log_path=str(_get("ERRLOG_PATH", "log_path", Config.log_path)),
        encoding=str(_get("ERRLOG_ENCODING", "encoding", Config.encoding)),
        create_dirs=_parse_bool(_get("ERRLOG_CREATE_DIRS", "create_dirs", Config.create_dirs)),
        capture_stderr=_parse_bool(
            _get("ERRLOG_CAPTURE_STDERR", "capture_stderr", Config.capture_stderr)
        ),
        stderr_level=stderr_level,
        capture_fd=_parse_bool(_get("ERRLOG_CAPTURE_FD", "capture_fd", Config.capture_fd)),
    )
