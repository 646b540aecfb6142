from movie_reviews.translation.interface import TranslationBackend
from movie_reviews.translation.http_backend import HttpTranslationBackend

__all__ = ["TranslationBackend", "HttpTranslationBackend"]
