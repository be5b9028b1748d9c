"""Application level helpers for assembling pipeline dependencies."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .clients import KamerClient, SourceCache
from .config import AppConfig
from .database import Storage, create_storage
from .pipeline import CrawlBoundary, ImportPipeline


@dataclass(slots=True)
class PipelineResources:
    """Container bundling the objects needed to run the pipeline."""

    pipeline: ImportPipeline
    client: KamerClient
    storage: Storage
    owns_client: bool = True
    owns_storage: bool = True

    def close(self) -> None:
        if self.owns_client:
            self.client.close()
        if self.owns_storage:
            self.storage.dispose()


def create_pipeline(
    config: AppConfig,
    *,
    storage: Storage | None = None,
    client: KamerClient | None = None,
) -> PipelineResources:
    owns_client = client is None
    owns_storage = storage is None
    kamer_client = client or KamerClient(
        config.source.base_url,
        timeout=config.source.timeout,
        max_retries=config.source.max_retries,
        encoding=config.source.encoding,
    )
    storage_instance = storage or create_storage(config.storage.database_url, echo=config.storage.echo_sql)
    pipeline = ImportPipeline(
        cache=SourceCache(Path(config.cache.directory), kamer_client),
        storage=storage_instance,
        boundary=CrawlBoundary(Path(config.crawl.state_directory)),
        session_id=config.source.session_id,
        probe_limit=config.crawl.max_probes,
    )
    return PipelineResources(
        pipeline=pipeline,
        client=kamer_client,
        storage=storage_instance,
        owns_client=owns_client,
        owns_storage=owns_storage,
    )


__all__ = ["PipelineResources", "create_pipeline"]
