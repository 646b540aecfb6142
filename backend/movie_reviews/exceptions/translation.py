class TranslationException(Exception):
    """Raised when the translation backend fails, times out or returns an unusable response."""
    pass
