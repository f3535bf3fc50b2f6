# docmirror/pipeline/transform.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Sequence

from docmirror.core.document import DocumentRecord
from docmirror.exceptions import PipelineError, StageOrderError
from docmirror.logging.logger import get_logger
from docmirror.logging.tags import TRANSFORM
from docmirror.pipeline.steps import (
    LinkNormalizeStep,
    PathStage,
    ReadmePromoteStep,
    RelocateStep,
    SanitizeStep,
    TransformStep,
)

if TYPE_CHECKING:
    from docmirror.config.schema import TransformConfig

logger = get_logger(__name__)


def check_step_order(
    steps: Sequence[TransformStep],
    initial: PathStage = PathStage.SOURCE,
) -> PathStage:
    """
    Walk the steps' path contracts and return the final path stage.

    Raises:
        StageOrderError: If a step would see a path shape it doesn't accept
    """
    current = initial
    for step in steps:
        if current not in step.requires:
            accepted = ", ".join(sorted(s.value for s in step.requires))
            raise StageOrderError(
                f"Step {step.name!r} requires paths in stage [{accepted}] "
                f"but runs after paths reached stage {current.value!r}"
            )
        if step.produces is not None:
            current = step.produces
    return current


def default_steps(
    docs_prefix: str = "docs/",
    link_mount: str = "docs",
) -> List[TransformStep]:
    return [
        RelocateStep(prefix=docs_prefix),
        SanitizeStep(),
        LinkNormalizeStep(mount=link_mount),
        ReadmePromoteStep(),
    ]


@dataclass
class TransformPipeline:
    """
    Ordered record transforms.

    Steps:
        relocate → sanitize → normalize_links → promote_readmes

    The order is validated against each step's path contract on
    construction; link normalization must see pre-rename paths.
    """

    steps: List[TransformStep] = field(default_factory=default_steps)

    def __post_init__(self) -> None:
        self.steps = list(self.steps)
        check_step_order(self.steps)

    @classmethod
    def from_config(cls, cfg: "TransformConfig") -> "TransformPipeline":
        return cls(steps=default_steps(cfg.docs_prefix, cfg.link_mount))

    def process(self, records: Sequence[DocumentRecord]) -> List[DocumentRecord]:
        out = list(records)
        for step in self.steps:
            logger.info(f"{TRANSFORM} Running {step.name} on {len(out)} pages")
            try:
                out = step(out)
            except Exception as exc:
                raise PipelineError(f"Transform step {step.name!r} failed: {exc}") from exc
        return out


__all__ = ["TransformPipeline", "check_step_order", "default_steps"]
