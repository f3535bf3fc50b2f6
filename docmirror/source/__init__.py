# docmirror/source/__init__.py
"""
Remote repository sources.

A source lists a repository tree and returns base64 blob content.
"""

from docmirror.source.github import GitHubClient, RateLimit

__all__ = ["GitHubClient", "RateLimit"]
