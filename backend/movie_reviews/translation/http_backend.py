import logging
from typing import Optional

import requests

from movie_reviews.exceptions.translation import TranslationException
from movie_reviews.translation.interface import TranslationBackend

logger = logging.getLogger(__name__)


class HttpTranslationBackend(TranslationBackend):
    """Client for a LibreTranslate-compatible ``POST /translate`` endpoint.

    Every call is bounded by ``timeout`` and is not retried here; callers
    decide whether to try again.
    """

    def __init__(self, api_url: str, timeout: float, api_key: Optional[str] = None,
                 session: Optional[requests.Session] = None):
        self.api_url = api_url
        self.timeout = timeout
        self.api_key = api_key
        self.session = session or requests.Session()

        logger.info(f"HttpTranslationBackend initialized: url={self.api_url}, timeout={self.timeout}s")

    def translate(self, source_language: str, target_language: str, text: str) -> str:
        payload = {
            "q": text,
            "source": source_language,
            "target": target_language,
            "format": "text",
        }
        if self.api_key:
            payload["api_key"] = self.api_key

        try:
            response = self.session.post(self.api_url, json=payload, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise TranslationException(f"Translation request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise TranslationException(f"Translation request failed: {str(e)}") from e

        if not 200 <= response.status_code < 300:
            raise TranslationException(f"Translation backend returned status {response.status_code}")

        try:
            translated = response.json()["translatedText"]
        except (ValueError, KeyError, TypeError) as e:
            raise TranslationException("Translation backend returned an unexpected body") from e

        if not isinstance(translated, str):
            raise TranslationException("Translation backend returned an unexpected body")

        logger.debug(f"Translated {len(text)} characters {source_language}->{target_language}")
        return translated

    def close(self):
        self.session.close()
