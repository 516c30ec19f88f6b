"""
pipeline.py

Responsibility: Run the enabled steps once, in their fixed order, stopping at the
first failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from devflow.config import Feature
from devflow.features import STEPS, Step, StepContext, StepResult

LOG = logging.getLogger(__name__)


@dataclass
class PipelineReport:
    results: list[StepResult] = field(default_factory=list)

    @property
    def failed(self) -> StepResult | None:
        for result in self.results:
            if not result.ok:
                return result
        return None

    @property
    def ok(self) -> bool:
        return self.failed is None

    @property
    def executed(self) -> list[Feature]:
        return [r.feature for r in self.results]


def run_pipeline(ctx: StepContext, steps: Iterable[tuple[Feature, Step]] = STEPS) -> PipelineReport:
    """
    Execute each enabled step in order. Disabled steps are skipped silently.

    A failed `StepResult` halts the run; later steps are not attempted.
    """
    report = PipelineReport()
    for feature, step in steps:
        if not ctx.config.is_enabled(feature):
            LOG.debug("Skipping disabled feature %s", feature.value)
            continue
        result = step(ctx)
        report.results.append(result)
        if not result.ok:
            LOG.debug("Stopping pipeline after failed feature %s", feature.value)
            break
    return report
