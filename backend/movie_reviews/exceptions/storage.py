class PosterStorageException(Exception):
    """Raised when a poster cannot be written to storage."""
    pass
