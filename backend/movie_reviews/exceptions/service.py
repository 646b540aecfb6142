class ServiceException(Exception):
    """Base exception for service operation errors."""
    pass

class IdAllocationException(ServiceException):
    """Raised when no free identifier could be claimed within the retry budget."""
    pass

class UpstreamException(ServiceException):
    """Raised when a backend call (translation, poster storage) fails or times out."""
    pass
