from __future__ import annotations

from pathlib import Path

from conftest import FakeReleases, RecordingExecutor, make_config, make_context
from devflow.config import Config, Feature
from devflow.pipeline import run_pipeline


def test_all_enabled_features_run_once_in_order(
    repo_dir: Path, events: list, executor: RecordingExecutor, releases: FakeReleases
) -> None:
    ctx = make_context(make_config(repo_dir), executor, releases, answer="no\n")

    report = run_pipeline(ctx)

    assert report.ok
    assert report.executed == list(Feature)
    assert [e[0] for e in events] == [
        "git pull",
        "npm install",
        "npm audit",
        "npx eslint . --fix",
        "npm test",
        "npm start",
        "GET",
        "docker build -t my-app .",
    ]
    assert ctx.prompt.state.value == "declined"


def test_disabled_features_invoke_nothing(
    repo_dir: Path, events: list, executor: RecordingExecutor, releases: FakeReleases
) -> None:
    ctx = make_context(make_config(repo_dir, enabled=()), executor, releases)

    report = run_pipeline(ctx)

    assert report.ok
    assert report.results == []
    assert events == []
    assert ctx.prompt.state.value == "idle"


def test_empty_config_runs_nothing(events: list, executor: RecordingExecutor, releases: FakeReleases) -> None:
    report = run_pipeline(make_context(Config(), executor, releases))

    assert report.results == []
    assert events == []


def test_only_selected_features_run(
    repo_dir: Path, events: list, executor: RecordingExecutor, releases: FakeReleases
) -> None:
    config = make_config(repo_dir, enabled=(Feature.BUILD_DOCKER_IMAGE, Feature.LINT_CODE))

    report = run_pipeline(make_context(config, executor, releases))

    assert report.executed == [Feature.LINT_CODE, Feature.BUILD_DOCKER_IMAGE]
    assert executor.commands == ["npx eslint . --fix", "docker build -t my-app ."]


def test_failure_stops_remaining_steps(repo_dir: Path, events: list, releases: FakeReleases) -> None:
    executor = RecordingExecutor(events, fail_on="npm audit")
    ctx = make_context(make_config(repo_dir), executor, releases)

    report = run_pipeline(ctx)

    assert not report.ok
    assert report.failed is not None
    assert report.failed.feature is Feature.CHECK_DEPENDENCIES
    assert report.executed == [
        Feature.CLONE_OR_UPDATE_REPOSITORY,
        Feature.INSTALL_DEPENDENCIES,
        Feature.DELETE_REPOSITORY,
        Feature.CHECK_DEPENDENCIES,
    ]
    assert [e[0] for e in events] == ["git pull", "npm install", "npm audit"]
