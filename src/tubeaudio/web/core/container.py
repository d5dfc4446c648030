"""Dependency injection container for the tubeaudio application."""

from dependency_injector import containers, providers

from tubeaudio.catalog.playlists import PlaylistResolver
from tubeaudio.catalog.store import MetadataStore
from tubeaudio.conversion.jobs import ConversionJobManager
from tubeaudio.conversion.orchestrator import ConversionOrchestrator
from tubeaudio.media.range_server import MediaRangeServer, media_type_for
from tubeaudio.system.path_resolver import PathResolver
from tubeaudio.system.process_runner import ProcessRunner
from tubeaudio.system.tool_probe import ToolProbe
from tubeaudio.web.core.config import get_config


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Every service that touches the catalog or the host is a singleton owned
    here; routers receive them through ``Provide[Container.<name>]``.
    """

    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    # External tools
    process_runner = providers.Singleton(
        ProcessRunner,
        max_output_bytes=providers.Factory(lambda c: c.conversion.max_output_bytes, c=config),
    )

    tool_probe = providers.Singleton(
        ToolProbe,
        extractor_candidates=providers.Factory(
            lambda c: c.conversion.extractor_candidates, c=config
        ),
        transcoder_candidates=providers.Factory(
            lambda c: c.conversion.transcoder_candidates, c=config
        ),
    )

    # Catalog - single writer shared by every request
    metadata_store = providers.Singleton(
        MetadataStore,
        path_resolver=path_resolver,
        default_category=providers.Factory(lambda c: c.default_category, c=config),
        all_categories_label=providers.Factory(lambda c: c.all_categories_label, c=config),
    )

    playlist_resolver = providers.Singleton(
        PlaylistResolver,
        metadata_store=metadata_store,
    )

    # Conversion
    conversion_orchestrator = providers.Singleton(
        ConversionOrchestrator,
        tool_probe=tool_probe,
        process_runner=process_runner,
        metadata_store=metadata_store,
        path_resolver=path_resolver,
        config=providers.Factory(lambda c: c.conversion, c=config),
        default_category=providers.Factory(lambda c: c.default_category, c=config),
        unknown_title=providers.Factory(lambda c: c.unknown_title, c=config),
    )

    conversion_jobs = providers.Singleton(
        ConversionJobManager,
        orchestrator=conversion_orchestrator,
        max_concurrent=providers.Factory(lambda c: c.conversion.max_concurrent_jobs, c=config),
        max_retained=providers.Factory(lambda c: c.conversion.max_retained_jobs, c=config),
    )

    # Byte delivery
    media_server = providers.Singleton(
        MediaRangeServer,
        metadata_store=metadata_store,
        path_resolver=path_resolver,
        chunk_size=providers.Factory(lambda c: c.stream_chunk_size, c=config),
        media_type=providers.Factory(
            lambda c: media_type_for(c.conversion.audio_format), c=config
        ),
    )
