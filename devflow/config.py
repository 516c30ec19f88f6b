"""
config.py

Responsibility: Load the devflow configuration file into an immutable, typed model.

The loader is deliberately thin:
- A missing file yields an empty `Config`; nothing is validated up front.
- A file that cannot be parsed is fatal (`ConfigParseError`).
- Required fields are checked at the point of use via the `Config` accessors,
  which raise `MissingFieldError` naming the dotted field.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.json")
DEFAULT_IMAGE = "my-app"
DEFAULT_HTTP_TIMEOUT = 30.0


class ConfigParseError(ValueError):
    pass


class MissingFieldError(LookupError):
    """Raised when a step reads a configuration field the file does not define."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Missing configuration field: {field_name}")
        self.field_name = field_name


class Feature(str, Enum):
    """Feature flags, declared in pipeline order."""

    CLONE_OR_UPDATE_REPOSITORY = "cloneOrUpdateRepository"
    INSTALL_DEPENDENCIES = "installDependencies"
    DELETE_REPOSITORY = "deleteRepository"
    CHECK_DEPENDENCIES = "checkDependencies"
    LINT_CODE = "lintCode"
    RUN_TESTS = "runTests"
    RUN_APPLICATION = "runApplication"
    CHECK_FOR_UPDATES = "checkForUpdates"
    BUILD_DOCKER_IMAGE = "buildDockerImage"


@dataclass(frozen=True)
class RepositoryConfig:
    url: str | None = None
    path: str | None = None


@dataclass(frozen=True)
class Config:
    """Parsed configuration shared (read-only) by every pipeline step."""

    repository: RepositoryConfig | None = None
    version: str | None = None
    features: Mapping[Feature, bool] = field(default_factory=lambda: MappingProxyType({}))
    commands: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    image: str = DEFAULT_IMAGE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    def is_enabled(self, feature: Feature) -> bool:
        return bool(self.features.get(feature, False))

    def repository_url(self) -> str:
        if self.repository is None or not self.repository.url:
            raise MissingFieldError("repository.url")
        return self.repository.url

    def repository_path(self) -> Path:
        if self.repository is None or not self.repository.path:
            raise MissingFieldError("repository.path")
        return Path(self.repository.path)

    def require_version(self) -> str:
        if self.version is None:
            raise MissingFieldError("version")
        return self.version


def _parse_text(text: str, path: Path) -> Any:
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in config file {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in config file {path}: {e}") from e


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    raw = data.get(key)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigParseError(f"`{key}` must be an object/mapping when provided.")
    return raw


def _parse_features(raw: Mapping[str, Any]) -> dict[Feature, bool]:
    known = {f.value: f for f in Feature}
    features: dict[Feature, bool] = {}
    for name, enabled in raw.items():
        feature = known.get(str(name))
        if feature is None:
            LOG.warning("Ignoring unknown feature flag: %s", name)
            continue
        features[feature] = bool(enabled)
    return features


def config_from_mapping(data: Mapping[str, Any]) -> Config:
    """
    Build a `Config` from already-deserialized data.

    Only structural problems (a section that is not a mapping) are rejected here;
    absent fields are left as None and reported when a step needs them.
    """
    repo_raw = data.get("repository")
    repository: RepositoryConfig | None = None
    if repo_raw is not None:
        if not isinstance(repo_raw, dict):
            raise ConfigParseError("`repository` must be an object/mapping when provided.")
        url = repo_raw.get("url")
        path = repo_raw.get("path")
        repository = RepositoryConfig(
            url=str(url) if url is not None else None,
            path=str(path) if path is not None else None,
        )

    version = data.get("version")
    if version is not None and not isinstance(version, str):
        # YAML reads an unquoted 1.10 as the float 1.1.
        raise ConfigParseError(f"`version` must be a string, got {version!r} (quote it in YAML files)")
    commands = {str(k): str(v) for k, v in _mapping(data, "commands").items()}

    timeout_raw = data.get("http_timeout", DEFAULT_HTTP_TIMEOUT)
    try:
        http_timeout = float(timeout_raw)
    except (TypeError, ValueError) as e:
        raise ConfigParseError(f"`http_timeout` must be a number, got {timeout_raw!r}") from e

    return Config(
        repository=repository,
        version=version,
        features=MappingProxyType(_parse_features(_mapping(data, "features"))),
        commands=MappingProxyType(commands),
        image=str(data.get("image") or DEFAULT_IMAGE),
        http_timeout=http_timeout,
    )


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Config:
    """
    Load the configuration file at `config_path`.

    Returns an empty `Config` when the file does not exist. JSON is expected by
    default; `.yaml`/`.yml` files are read with PyYAML.
    """
    path = Path(config_path)
    if not path.exists():
        LOG.debug("Config file %s not found; using empty configuration", path)
        return Config()

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParseError(f"Config file {path} is not valid UTF-8: {e}") from e

    data = _parse_text(text, path)
    if data is None and path.suffix.lower() in (".yaml", ".yml"):
        # An empty YAML document.
        return Config()
    if not isinstance(data, dict):
        raise ConfigParseError(f"Config file {path} must contain an object/mapping at the top level.")
    return config_from_mapping(data)
