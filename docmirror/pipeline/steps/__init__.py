# docmirror/pipeline/steps/__init__.py
from docmirror.pipeline.steps.base import ANY_STAGE, PathStage, TransformStep
from docmirror.pipeline.steps.links import LinkNormalizeStep, normalize_links
from docmirror.pipeline.steps.readme import ReadmePromoteStep, promote_readme
from docmirror.pipeline.steps.relocate import RelocateStep
from docmirror.pipeline.steps.sanitize import SanitizeStep, sanitize

__all__ = [
    "ANY_STAGE",
    "PathStage",
    "TransformStep",
    "RelocateStep",
    "SanitizeStep",
    "sanitize",
    "LinkNormalizeStep",
    "normalize_links",
    "ReadmePromoteStep",
    "promote_readme",
]
