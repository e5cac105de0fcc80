"""
Frequency Translator API server.

Wires the SQLite database, the language classifier and the translation
service into a FastAPI app together with CORS, Prometheus instrumentation and
the JSON error handlers.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_fastapi_instrumentator import Instrumentator
from prometheus_fastapi_instrumentator import metrics as instrumentator_metrics

from translator.core.config import Settings, get_settings
from translator.core.error_handlers import (
    base_exception_handler,
    store_error_handler,
    unhandled_exception_handler,
)
from translator.core.exceptions import BaseAppException
from translator.db.database import TranslatorDatabase
from translator.routes import health, languages, translation
from translator.services.language.classifier import LanguageClassifier
from translator.services.language.samples import seed_reference_profiles
from translator.services.language.store import SQLiteProfileStore, StoreError
from translator.services.translation.cache import TieredTranslationCache
from translator.services.translation.translation_service import TranslationService

logging.basicConfig(
    level=get_settings().LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)

logger = logging.getLogger("translator.main")

UNINSTRUMENTED_PATHS = ["/health", "/health/ready", "/health/live", "/metrics"]


def build_services(settings: Settings) -> tuple[LanguageClassifier, TranslationService]:
    """Wire the database, profile store, classifier and translation service.

    The database schema is created if missing. A failure to create it is
    logged and the classifier starts with an empty catalog.
    """
    database = TranslatorDatabase(settings.DATABASE_PATH)
    try:
        database.initialize()
    except Exception:
        logger.exception("Database initialization failed; continuing degraded")

    classifier = LanguageClassifier.bootstrap_from(SQLiteProfileStore(database))

    if settings.SEED_REFERENCE_PROFILES and classifier.load_error is None:
        try:
            seed_reference_profiles(classifier)
        except StoreError as e:
            logger.error(f"Could not seed reference language profiles: {e}")

    translation_service = TranslationService(
        classifier=classifier,
        cache_backend=TieredTranslationCache(
            database, l1_size=settings.TRANSLATION_CACHE_L1_SIZE
        ),
        default_target_lang=settings.DEFAULT_TARGET_LANGUAGE,
        english_target_lang=settings.ENGLISH_TARGET_LANGUAGE,
    )
    return classifier, translation_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(f"Starting {settings.PROJECT_NAME} ({settings.ENVIRONMENT})")
    settings.ensure_data_dirs()

    classifier, translation_service = build_services(settings)
    app.state.settings = settings
    app.state.classifier = classifier
    app.state.translation_service = translation_service
    logger.info(f"Services ready with {len(classifier.catalog)} language profiles")

    yield

    logger.info("Shutting down; releasing services")
    app.state.translation_service = None
    app.state.classifier = None


def _add_cors(app: FastAPI, origins: list[str]) -> None:
    # Starlette rejects credentials together with a wildcard origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _add_instrumentation(app: FastAPI) -> None:
    """HTTP request metrics go to the default registry served on /metrics."""
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=False,
        should_instrument_requests_inprogress=True,
        excluded_handlers=UNINSTRUMENTED_PATHS,
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )
    instrumentator.add(instrumentator_metrics.default())
    instrumentator.instrument(app)


settings = get_settings()

app = FastAPI(
    title=settings.PROJECT_NAME,
    docs_url="/api/docs",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)
_add_cors(app, settings.CORS_ORIGINS)
_add_instrumentation(app)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus exposition of the default registry."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.add_exception_handler(BaseAppException, base_exception_handler)  # type: ignore[arg-type]
app.add_exception_handler(StoreError, store_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(health.router, tags=["Health"])
app.include_router(translation.router, prefix=settings.API_V1_STR, tags=["Translation"])
app.include_router(languages.router, prefix=settings.API_V1_STR, tags=["Languages"])
