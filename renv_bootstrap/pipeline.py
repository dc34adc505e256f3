from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .config import BootstrapConfig
from .lib.env import HostEnv
from .lib.manifests import PackageManifest
from .lib.pkg import PackageManagerClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapCtx:
    cfg: BootstrapConfig
    env: HostEnv
    manifest: PackageManifest
    client: PackageManagerClient
    dry_run: bool = False

    @property
    def makevars_path(self) -> Path:
        return self.cfg.makevars_path(self.env.home)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str
    required: bool

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]


def run_pipeline(
    *,
    ctx: BootstrapCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order; the first failure propagates and ends the run.

    start_at skips earlier steps unless they are marked required.
    """

    known = [s.step_id for s in steps]
    for name in (start_at, stop_after):
        if name is not None and name not in known:
            raise ValueError(f"Unknown step id: {name} (known: {', '.join(known)})")
    if start_at is not None and stop_after is not None and known.index(stop_after) < known.index(start_at):
        raise ValueError(f"--stop-after {stop_after} comes before --start-at {start_at}")

    ran: List[str] = []
    skipped: List[str] = []

    started = start_at is None

    for step in steps:
        if not started and step.step_id == start_at:
            started = True

        state.setdefault("execution", {})["current_step"] = step.step_id

        if started or getattr(step, "required", False):
            logger.debug("Running step %s", step.step_id)
            state = step.run(ctx, state)
            ran.append(step.step_id)
        else:
            logger.info("Skipping step %s (before %s)", step.step_id, start_at)
            skipped.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped)
