import logging
from typing import Any, Dict, Optional, Tuple

from movie_reviews.repositories import ReviewRepository
from movie_reviews.translation.interface import TranslationBackend
from movie_reviews.exceptions.repository import EntityNotFoundException
from movie_reviews.exceptions.service import UpstreamException
from movie_reviews.exceptions.translation import TranslationException

logger = logging.getLogger(__name__)


class TranslationService:
    """Cache-aside translation of review content.

    Each review has a single ``translated_content`` slot that does not record
    its language: once filled, it is returned for every target language.
    """

    def __init__(self,
                 review_repository: ReviewRepository,
                 translation_backend: TranslationBackend,
                 config: Dict[str, Any]
                 ):
        self._review_repo = review_repository
        self._backend = translation_backend
        self._source_language = config.get('source_language', 'en')
        self._default_target_language = config.get('default_target_language', 'fr')

    @property
    def default_target_language(self) -> str:
        return self._default_target_language

    def get_translation(self, movie_id: int, review_id: int,
                        target_language: Optional[str] = None) -> Tuple[str, bool]:
        """Return ``(translated_text, served_from_cache)``."""
        review = self._review_repo.get_by_key(movie_id, review_id)
        if review is None:
            raise EntityNotFoundException(f"Review {review_id} for movie {movie_id} not found")

        if review.translated_content:
            logger.debug(f"Translation cache hit for review {movie_id}/{review_id}")
            return review.translated_content, True

        target = target_language or self._default_target_language
        try:
            translated = self._backend.translate(self._source_language, target, review.content)
        except TranslationException as e:
            logger.error(f"Translation of review {movie_id}/{review_id} to {target} failed: {str(e)}")
            raise UpstreamException("Translation service unavailable") from e

        # a concurrent delete between read and write surfaces as not found
        self._review_repo.set_translated_content(movie_id, review_id, translated)
        logger.info(f"Cached {target} translation for review {movie_id}/{review_id}")
        return translated, False
