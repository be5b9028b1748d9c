"""Pipeline orchestration components."""
from __future__ import annotations

from .crawl import CrawlBoundary
from .import_pipeline import ImportPipeline, PipelineEvent

__all__ = ["CrawlBoundary", "ImportPipeline", "PipelineEvent"]
