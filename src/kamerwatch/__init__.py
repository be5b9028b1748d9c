"""Extraction of Belgian Chamber plenary and committee reports."""
from __future__ import annotations

from .clients import DocumentNotFoundError, KamerClient, KamerClientError, SourceCache
from .config import AppConfig, CacheConfig, CrawlConfig, SourceConfig, StorageConfig, load_config
from .core import Dossier, Meeting, MeetingKind, MeetingReport, Proposition, Question, Vote
from .database import Base, Storage, create_storage
from .parsing import parse_commission, parse_dossier, parse_plenary
from .pipeline import CrawlBoundary, ImportPipeline, PipelineEvent
from .runtime import PipelineResources, create_pipeline

__all__ = [
    "AppConfig",
    "Base",
    "CacheConfig",
    "CrawlBoundary",
    "CrawlConfig",
    "DocumentNotFoundError",
    "Dossier",
    "ImportPipeline",
    "KamerClient",
    "KamerClientError",
    "Meeting",
    "MeetingKind",
    "MeetingReport",
    "PipelineEvent",
    "PipelineResources",
    "Proposition",
    "Question",
    "SourceCache",
    "SourceConfig",
    "Storage",
    "StorageConfig",
    "Vote",
    "create_pipeline",
    "create_storage",
    "load_config",
    "parse_commission",
    "parse_dossier",
    "parse_plenary",
]
