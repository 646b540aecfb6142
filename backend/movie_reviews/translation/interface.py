from abc import ABC, abstractmethod


class TranslationBackend(ABC):
    @abstractmethod
    def translate(self, source_language: str, target_language: str, text: str) -> str:
        """Return ``text`` translated, or raise TranslationException."""
        pass

    def close(self):
        pass
