"""
features.py

Responsibility: One function per pipeline step, each wrapping exactly one external
invocation (a tool command, the release lookup, or the delete prompt).

Every step returns a `StepResult`. Expected failures (a tool exiting non-zero,
the release lookup failing, deletion failing) are logged here once, with context,
and reported in the result. A `MissingFieldError` is not a step outcome: it
propagates to the caller.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from typing import Callable

from devflow import commands
from devflow.commands import render_command
from devflow.config import Config, Feature
from devflow.confirm import ConfirmationPrompt
from devflow.releases import NetworkError, ReleaseClient
from devflow.runner import ExecutionError, execute

LOG = logging.getLogger(__name__)

EXECUTION = "execution"
NETWORK = "network"
FILESYSTEM = "filesystem"

DELETE_QUESTION = "Do you want to delete the repository folder? (yes/no): "


@dataclass(frozen=True)
class StepResult:
    feature: Feature
    ok: bool
    error: str | None = None
    kind: str | None = None

    @classmethod
    def success(cls, feature: Feature) -> StepResult:
        return cls(feature=feature, ok=True)

    @classmethod
    def failure(cls, feature: Feature, kind: str, error: BaseException) -> StepResult:
        return cls(feature=feature, ok=False, error=str(error), kind=kind)


@dataclass
class StepContext:
    """Everything a step may touch: the config plus injected capabilities."""

    config: Config
    execute: Callable[..., None] = execute
    releases: ReleaseClient | None = None
    prompt: ConfirmationPrompt = field(default_factory=ConfirmationPrompt)

    def release_client(self) -> ReleaseClient:
        if self.releases is None:
            self.releases = ReleaseClient(timeout=self.config.http_timeout)
        return self.releases


def _run_tool(
    ctx: StepContext,
    feature: Feature,
    *,
    intent: str,
    failure: str,
    command_name: str,
    in_repository: bool = True,
) -> StepResult:
    # Resolve config fields before announcing anything; a MissingFieldError must
    # surface before the tool is launched.
    cwd = ctx.config.repository_path() if in_repository else None
    command = render_command(ctx.config, command_name)
    LOG.info(intent)
    try:
        ctx.execute(command, cwd=cwd)
    except ExecutionError as e:
        LOG.error("%s: %s", failure, e)
        return StepResult.failure(feature, EXECUTION, e)
    return StepResult.success(feature)


def clone_or_update_repository(ctx: StepContext) -> StepResult:
    path = ctx.config.repository_path()
    if not path.exists():
        return _run_tool(
            ctx,
            Feature.CLONE_OR_UPDATE_REPOSITORY,
            intent="Cloning repository...",
            failure="Error cloning or updating repository",
            command_name=commands.CLONE,
            in_repository=False,
        )
    return _run_tool(
        ctx,
        Feature.CLONE_OR_UPDATE_REPOSITORY,
        intent="Updating repository...",
        failure="Error cloning or updating repository",
        command_name=commands.PULL,
    )


def install_dependencies(ctx: StepContext) -> StepResult:
    return _run_tool(
        ctx,
        Feature.INSTALL_DEPENDENCIES,
        intent="Installing dependencies...",
        failure="Error installing dependencies",
        command_name=commands.INSTALL,
    )


def delete_repository(ctx: StepContext) -> StepResult:
    """
    Ask once whether to delete the working copy and remove it on "yes".
    """
    path = ctx.config.repository_path()
    if not ctx.prompt.ask(DELETE_QUESTION):
        LOG.info("Keeping repository folder.")
        return StepResult.success(Feature.DELETE_REPOSITORY)

    if not path.exists():
        LOG.info("Repository folder does not exist.")
        return StepResult.success(Feature.DELETE_REPOSITORY)
    try:
        shutil.rmtree(path)
    except OSError as e:
        LOG.error("Error deleting repository folder: %s", e)
        return StepResult.failure(Feature.DELETE_REPOSITORY, FILESYSTEM, e)
    LOG.info("Repository folder deleted.")
    return StepResult.success(Feature.DELETE_REPOSITORY)


def check_dependencies(ctx: StepContext) -> StepResult:
    return _run_tool(
        ctx,
        Feature.CHECK_DEPENDENCIES,
        intent="Checking for outdated and vulnerable dependencies...",
        failure="Error checking dependencies",
        command_name=commands.AUDIT,
    )


def lint_code(ctx: StepContext) -> StepResult:
    return _run_tool(
        ctx,
        Feature.LINT_CODE,
        intent="Linting code...",
        failure="Error linting code",
        command_name=commands.LINT,
    )


def run_tests(ctx: StepContext) -> StepResult:
    return _run_tool(
        ctx,
        Feature.RUN_TESTS,
        intent="Running tests...",
        failure="Error running tests",
        command_name=commands.TEST,
    )


def run_application(ctx: StepContext) -> StepResult:
    return _run_tool(
        ctx,
        Feature.RUN_APPLICATION,
        intent="Running application...",
        failure="Error running application",
        command_name=commands.START,
    )


def check_for_updates(ctx: StepContext) -> StepResult:
    """
    Compare the latest published release tag with the configured version.

    Advisory only: the result is logged, nothing is updated.
    """
    url = ctx.config.repository_url()
    current = ctx.config.require_version()
    LOG.info("Checking for updates...")
    try:
        latest = ctx.release_client().latest_release(url).tag_name
    except NetworkError as e:
        LOG.error("Error checking for updates: %s", e)
        return StepResult.failure(Feature.CHECK_FOR_UPDATES, NETWORK, e)

    if latest != current:
        LOG.info("An update is available! Current version: %s, Latest version: %s", current, latest)
    else:
        LOG.info("No updates available.")
    return StepResult.success(Feature.CHECK_FOR_UPDATES)


def build_docker_image(ctx: StepContext) -> StepResult:
    return _run_tool(
        ctx,
        Feature.BUILD_DOCKER_IMAGE,
        intent="Building Docker image...",
        failure="Error building Docker image",
        command_name=commands.DOCKER_BUILD,
    )


Step = Callable[[StepContext], StepResult]

STEPS: tuple[tuple[Feature, Step], ...] = (
    (Feature.CLONE_OR_UPDATE_REPOSITORY, clone_or_update_repository),
    (Feature.INSTALL_DEPENDENCIES, install_dependencies),
    (Feature.DELETE_REPOSITORY, delete_repository),
    (Feature.CHECK_DEPENDENCIES, check_dependencies),
    (Feature.LINT_CODE, lint_code),
    (Feature.RUN_TESTS, run_tests),
    (Feature.RUN_APPLICATION, run_application),
    (Feature.CHECK_FOR_UPDATES, check_for_updates),
    (Feature.BUILD_DOCKER_IMAGE, build_docker_image),
)
