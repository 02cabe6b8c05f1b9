"""
Container d'injection de dependances via dependency-injector.

Assemble les adaptateurs (TMDB, ffprobe, SQLModel) et les services
d'ingestion pour le code d'ordonnancement des taches.
"""

from dependency_injector import containers, providers
from sqlmodel import Session

from .adapters.api.cache import APICache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.metadata.tmdb_provider import TmdbMetadataProvider
from .adapters.parsing.path_classifier import PathClassifier
from .adapters.probe.ffprobe import FFprobeStreamProbe
from .config import Settings
from .infrastructure.persistence.database import create_db_engine, init_db
from .infrastructure.persistence.repositories import (
    SQLModelMediaLinkRepository,
    SQLModelMetadataRepository,
    SQLModelStreamEncodingRepository,
)
from .logging_config import configure_from_settings
from .services.importer import ImportCoordinator
from .services.metadata_resolver import MetadataResolver
from .services.preview_generator import PreviewGenerator
from .services.processors import MovieImportProcessor, TvImportProcessor
from .services.stream_analyzer import StreamAnalyzer


def _enabled_providers(settings: Settings, tmdb: TmdbMetadataProvider) -> list:
    """Fournisseurs de metadonnees configures."""
    return [tmdb] if settings.tmdb_enabled else []


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.init_resources()  # logging + creation des tables
        coordinator = container.import_coordinator()
        async for outcome in coordinator.import_all(root, MediaKind.MOVIE):
            ...
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    logging = providers.Resource(configure_from_settings, settings=config)

    # Base de donnees
    engine = providers.Singleton(
        create_db_engine, database_url=config.provided.database_url
    )
    database = providers.Resource(init_db, engine=engine)

    # Session partagee par les repositories d'un meme container
    session = providers.Singleton(Session, engine)

    media_link_repository = providers.Factory(
        SQLModelMediaLinkRepository, session=session
    )
    metadata_repository = providers.Factory(
        SQLModelMetadataRepository, session=session
    )
    stream_encoding_repository = providers.Factory(
        SQLModelStreamEncodingRepository, session=session
    )

    # Adapters
    path_classifier = providers.Singleton(PathClassifier)

    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
        language=config.provided.tmdb_language,
    )
    tmdb_provider = providers.Singleton(
        TmdbMetadataProvider,
        client=tmdb_client,
        metadata_repo=metadata_repository,
    )
    stream_probe = providers.Singleton(
        FFprobeStreamProbe,
        ffprobe_path=config.provided.ffprobe_path,
        timeout=config.provided.probe_timeout_seconds,
    )

    # Services
    metadata_resolver = providers.Singleton(
        MetadataResolver,
        providers=providers.Callable(
            _enabled_providers, settings=config, tmdb=tmdb_provider
        ),
    )

    movie_processor = providers.Factory(
        MovieImportProcessor,
        resolver=metadata_resolver,
        media_link_repo=media_link_repository,
        classifier=path_classifier,
    )
    tv_processor = providers.Factory(
        TvImportProcessor,
        resolver=metadata_resolver,
        media_link_repo=media_link_repository,
        classifier=path_classifier,
        season_concurrency=config.provided.season_concurrency,
    )

    import_coordinator = providers.Factory(
        ImportCoordinator,
        processors=providers.List(movie_processor, tv_processor),
        media_link_repo=media_link_repository,
        concurrency=config.provided.import_concurrency,
    )

    stream_analyzer = providers.Factory(
        StreamAnalyzer,
        probe=stream_probe,
        stream_repo=stream_encoding_repository,
        concurrency=config.provided.analyze_concurrency,
    )

    preview_generator = providers.Factory(
        PreviewGenerator,
        media_link_repo=media_link_repository,
        output_dir=config.provided.previews_dir,
        ffmpeg_path=config.provided.ffmpeg_path,
        interval_seconds=config.provided.preview_interval_seconds,
        image_width=config.provided.preview_image_width,
        image_quality=config.provided.preview_image_quality,
    )
