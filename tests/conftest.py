"""Shared fixtures for the devflow test suite."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from devflow.config import Config, Feature, RepositoryConfig
from devflow.confirm import ConfirmationPrompt
from devflow.features import StepContext
from devflow.releases import ReleaseInfo
from devflow.runner import ExecutionError


class RecordingExecutor:
    """Stands in for `runner.execute`; records calls into a shared event log."""

    def __init__(self, events: list[tuple[str, object]], fail_on: str | None = None) -> None:
        self.events = events
        self.fail_on = fail_on

    def __call__(self, command: str, *, cwd: Path | None = None) -> None:
        self.events.append((command, cwd))
        if self.fail_on is not None and self.fail_on in command:
            raise ExecutionError(f"Command failed: {command} (exit status 1)", command=command, returncode=1)

    @property
    def commands(self) -> list[str]:
        return [c for c, _ in self.events if c != "GET"]


class FakeReleases:
    def __init__(self, events: list[tuple[str, object]], tag: str = "1.2.0") -> None:
        self.events = events
        self.tag = tag

    def latest_release(self, repository_url: str) -> ReleaseInfo:
        self.events.append(("GET", repository_url))
        return ReleaseInfo(tag_name=self.tag)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def events() -> list[tuple[str, object]]:
    return []


@pytest.fixture
def executor(events: list[tuple[str, object]]) -> RecordingExecutor:
    return RecordingExecutor(events)


@pytest.fixture
def releases(events: list[tuple[str, object]]) -> FakeReleases:
    return FakeReleases(events)


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    path = tmp_path / "my-app"
    path.mkdir()
    (path / "package.json").write_text("{}", encoding="utf-8")
    return path


def make_config(repo_path: Path, *, enabled: tuple[Feature, ...] = tuple(Feature), **kwargs) -> Config:
    return Config(
        repository=RepositoryConfig(url="https://git.example.com/acme/my-app", path=str(repo_path)),
        version=kwargs.pop("version", "1.2.0"),
        features={f: True for f in enabled},
        **kwargs,
    )


def make_context(config: Config, executor, releases, answer: str = "no\n") -> StepContext:
    return StepContext(
        config=config,
        execute=executor,
        releases=releases,
        prompt=ConfirmationPrompt(stdin=io.StringIO(answer), stdout=io.StringIO()),
    )
