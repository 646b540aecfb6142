from contextlib import asynccontextmanager
from typing import Any, Dict, Optional
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
import logging

from movie_reviews.config import API_DESCRIPTION, API_TITLE, VERSION, load_config, validate_config
from movie_reviews.config.logging import setup_logging
from movie_reviews.controllers.auth_controller import router as auth_router
from movie_reviews.controllers.errors import request_validation_handler
from movie_reviews.controllers.movie_controller import router as movie_router
from movie_reviews.controllers.review_controller import router as review_router
from movie_reviews.db.database import create_db_engine, create_session_factory, init_db
from movie_reviews.storage import LocalPosterStorage, PosterStorage
from movie_reviews.translation import HttpTranslationBackend, TranslationBackend

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Dict[str, Any]] = None,
    translation_backend: Optional[TranslationBackend] = None,
    poster_storage: Optional[PosterStorage] = None
) -> FastAPI:
    """Build the API with its process-wide clients.

    The engine, translation backend and poster storage are created once here
    and shared by every request through ``app.state``. Run with
    ``uvicorn movie_reviews.main:create_app --factory``.
    """
    config = config or load_config()
    validate_config(config)

    if config['logging'].get('enabled', True):
        setup_logging(config['logging']['directory'], config['logging']['level'])

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.translation_backend.close()
        app.state.engine.dispose()
        logger.info("Released translation client and database engine")

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=VERSION,
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config['cors_allow_origins'],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # include controllers
    app.include_router(movie_router)
    app.include_router(review_router)
    app.include_router(auth_router)

    engine = create_db_engine(config['database']['url'], config['database']['timeout_seconds'])
    init_db(engine)

    if translation_backend is None:
        translation_backend = HttpTranslationBackend(
            api_url=config['translation']['api_url'],
            timeout=config['translation']['timeout_seconds'],
            api_key=config['translation']['api_key']
        )
    if poster_storage is None:
        poster_storage = LocalPosterStorage(
            directory=config['posters']['directory'],
            base_url=config['posters']['base_url']
        )

    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.translation_backend = translation_backend
    app.state.poster_storage = poster_storage

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    logger.info("Movie Reviews API initialized")
    return app
