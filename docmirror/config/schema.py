# docmirror/config/schema.py
"""
Configuration schemas for the mirror pipeline.

This module defines Pydantic models for:
- GitHubConfig: API endpoint, owner and credential
- RepoSpec: One source repository and the subtree it is mounted under
- TransformConfig: Parameters of the transform steps
- OutputConfig: Where documents are published
- MirrorConfig: Top-level configuration

The config is loaded once at process start and passed explicitly through
the pipeline.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docmirror.core.paths import escapes_root
from docmirror.logging.logger import get_logger
from docmirror.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULT_EXCLUDED_PATHS = [
    "README.md",
    "docs/README.md",
    "DOCUMENTATION.md",
    "HISTORICAL_CHANGELOG.md",
    "contrib/sles11/README.md",
]


class GitHubConfig(BaseModel):
    """Connection settings for the GitHub REST API."""

    api_url: str = Field(default="https://api.github.com", description="API base URL")
    owner: str = Field(..., description="Organization or user owning the repositories")
    token: Optional[str] = Field(default=None, description="Access token (prefer token_env)")
    token_env: str = Field(
        default="GITHUB_TOKEN", description="Environment variable holding the token"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    model_config = ConfigDict(extra="forbid")


class RepoSpec(BaseModel):
    """
    One source repository.

    Example:
        >>> RepoSpec(name="go.d.plugin", prefix="collectors/go.d.plugin/")
    """

    name: str = Field(..., min_length=1, description="Repository name under the owner")
    branch: str = Field(default="master", description="Branch whose head is mirrored")
    prefix: str = Field(
        default="", description="Subtree the repository's paths are mounted under"
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("prefix")
    @classmethod
    def relative_prefix(cls, v: str) -> str:
        if v.startswith("/"):
            raise ValueError("prefix must be a relative path")
        return v


class TransformConfig(BaseModel):
    """Parameters of the transform steps."""

    docs_prefix: str = Field(
        default="docs/", description="Directory whose contents are moved to the output root"
    )
    link_mount: str = Field(
        default="docs", description="Site path relative links are resolved under"
    )

    model_config = ConfigDict(extra="forbid")


class OutputConfig(BaseModel):
    """Where mirrored documents are written."""

    root: Path = Field(default=Path("./docs"), description="Output directory")
    preserve: List[str] = Field(
        default_factory=list,
        description="Paths under root carried over from the previous output",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("preserve")
    @classmethod
    def inside_root(cls, v: List[str]) -> List[str]:
        for rel in v:
            if escapes_root(rel):
                raise ValueError(f"preserved path must stay inside the output root: {rel!r}")
        return v


class MirrorConfig(BaseModel):
    """
    Central configuration for the mirror pipeline.

    Example YAML:
        github:
          owner: netdata
        repos:
          - name: netdata
          - name: go.d.plugin
            prefix: collectors/go.d.plugin/
        output:
          root: ./docs
    """

    github: GitHubConfig
    repos: List[RepoSpec] = Field(..., min_length=1, description="Primary repository first")
    excluded_paths: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_PATHS))
    transforms: TransformConfig = Field(default_factory=TransformConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    max_workers: int = Field(default=8, ge=1, description="Concurrent requests/writes")

    model_config = ConfigDict(extra="forbid")

    @property
    def primary(self) -> RepoSpec:
        return self.repos[0]

    def resolve_token(self) -> Optional[str]:
        """
        Explicit token, else the token environment variable.

        Returns None (and logs a warning) when neither is set.
        """
        if self.github.token:
            return self.github.token

        token = os.environ.get(self.github.token_env)
        if token:
            return token

        logger.warning(
            f"{CONFIG} No GitHub token configured (set {self.github.token_env}); "
            f"anonymous requests are limited to 60 per hour"
        )
        return None


__all__ = [
    "DEFAULT_EXCLUDED_PATHS",
    "GitHubConfig",
    "RepoSpec",
    "TransformConfig",
    "OutputConfig",
    "MirrorConfig",
]
