# tests/test_transform_pipeline.py
"""
Tests for TransformPipeline and its step ordering contract.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

import pytest

from docmirror.config.schema import TransformConfig
from docmirror.core.document import DocumentRecord, TreeEntry
from docmirror.exceptions import PipelineError, StageOrderError
from docmirror.pipeline.steps import (
    ANY_STAGE,
    LinkNormalizeStep,
    PathStage,
    ReadmePromoteStep,
    RelocateStep,
    SanitizeStep,
    TransformStep,
)
from docmirror.pipeline.transform import TransformPipeline, check_step_order, default_steps


@dataclass
class ExplodingStep:
    name: str = field(default="explode", init=False)
    requires: FrozenSet[PathStage] = field(default=ANY_STAGE, init=False)
    produces: Optional[PathStage] = field(default=None, init=False)

    def __call__(self, records):
        raise ValueError("boom")


def _record(path: str, body: str) -> DocumentRecord:
    return DocumentRecord(TreeEntry(path, "blob"), body)


class TestStepOrder:
    def test_default_order_is_valid(self):
        assert check_step_order(default_steps()) == PathStage.PROMOTED

    def test_default_steps_are_in_order(self):
        names = [step.name for step in default_steps()]

        assert names == ["relocate", "sanitize", "normalize_links", "promote_readmes"]

    def test_steps_satisfy_protocol(self):
        assert all(isinstance(step, TransformStep) for step in default_steps())

    def test_links_after_promotion_rejected(self):
        steps = [RelocateStep(), ReadmePromoteStep(), LinkNormalizeStep()]

        with pytest.raises(StageOrderError, match="normalize_links"):
            check_step_order(steps)

    def test_promotion_before_relocation_rejected(self):
        with pytest.raises(StageOrderError):
            TransformPipeline(steps=[ReadmePromoteStep(), RelocateStep()])

    def test_sanitize_runs_anywhere(self):
        steps = [SanitizeStep(), RelocateStep(), ReadmePromoteStep(), SanitizeStep()]

        assert check_step_order(steps) == PathStage.PROMOTED


class TestTransformPipeline:
    def test_default_pipeline(self):
        records = [
            _record("docs/a/README.md", "# A\n[x](../x.md)\n[y](y.md)\n[gh](https://github.com)"),
            _record("docs/guide.md", "# Title\n[text](./other.md)"),
            _record("collectors/x.md", "plain"),
        ]

        out = TransformPipeline().process(records)

        assert [r.path for r in out] == ["a.md", "guide.md", "collectors/x.md"]
        assert out[0].body == "\n[x](/docs/x.md)\n[y](/docs/a/y.md)\n[gh](https://github.com)"
        assert out[1].body == "\n[text](/docs/other.md)"
        assert out[2].body == "plain"

    def test_from_config(self):
        cfg = TransformConfig(docs_prefix="documentation/", link_mount="site")
        records = [_record("documentation/a/page.md", "[x](x.md)")]

        out = TransformPipeline.from_config(cfg).process(records)

        assert out[0].path == "a/page.md"
        assert out[0].body == "[x](/site/a/x.md)"

    def test_empty_input(self):
        assert TransformPipeline().process([]) == []

    def test_step_failure_is_wrapped(self):
        pipeline = TransformPipeline(steps=[RelocateStep(), ExplodingStep()])

        with pytest.raises(PipelineError, match="explode") as exc_info:
            pipeline.process([_record("docs/a.md", "text")])

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_input_records_unchanged(self):
        records = [_record("docs/guide.md", "# Title\nbody")]

        TransformPipeline().process(records)

        assert records[0].path == "docs/guide.md"
        assert records[0].body == "# Title\nbody"
