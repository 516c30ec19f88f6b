"""
commands.py

Responsibility: Turn command templates into concrete shell command lines.

Rules:
- Every external tool invocation is described by a Jinja2 template string.
- Defaults live in `DEFAULT_COMMANDS`; the config's `commands` mapping may override them.
- Repository fields are read through the `Config` accessors, so a template that references a field
  the file does not define fails before any tool is launched.

This module intentionally does NOT run anything.
"""

from __future__ import annotations

import shlex
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError, meta

from devflow.config import DEFAULT_IMAGE, Config, ConfigParseError

CLONE = "clone"
PULL = "pull"
INSTALL = "install"
AUDIT = "audit"
LINT = "lint"
TEST = "test"
START = "start"
DOCKER_BUILD = "dockerBuild"

DEFAULT_COMMANDS: dict[str, str] = {
    CLONE: "git clone {{ repository.url | quote }} {{ repository.path | quote }}",
    PULL: "git pull",
    INSTALL: "npm install",
    AUDIT: "npm audit",
    LINT: "npx eslint . --fix",
    TEST: "npm test",
    START: "npm start",
    DOCKER_BUILD: "docker build -t {{ image | quote }} .",
}

_env = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=False)
_env.filters["quote"] = lambda value: shlex.quote(str(value))


class _RepositoryFields:
    """Template view of `repository`; reads go through the `Config` accessors."""

    def __init__(self, config: Config) -> None:
        self._config = config

    @property
    def url(self) -> str:
        return self._config.repository_url()

    @property
    def path(self) -> str:
        return str(self._config.repository_path())


def _build_context(config: Config) -> dict[str, Any]:
    return {
        "repository": _RepositoryFields(config),
        "version": config.version,
        "image": config.image or DEFAULT_IMAGE,
    }


def command_template(config: Config, name: str) -> str:
    if name in config.commands:
        return config.commands[name]
    try:
        return DEFAULT_COMMANDS[name]
    except KeyError as e:
        raise ConfigParseError(f"Unknown command: {name}") from e


def render_command(config: Config, name: str) -> str:
    """
    Render the command line for `name` using the config as template context.

    A referenced field the config lacks raises `MissingFieldError`; a variable
    that is not a config field at all is a template error.
    """
    source = command_template(config, name)
    try:
        ast = _env.parse(source)
    except TemplateSyntaxError as e:
        raise ConfigParseError(f"Invalid command template for {name!r}: {e}") from e

    if "version" in meta.find_undeclared_variables(ast):
        config.require_version()

    try:
        return _env.from_string(ast).render(**_build_context(config)).strip()
    except UndefinedError as e:
        raise ConfigParseError(f"Invalid command template for {name!r}: {e}") from e
