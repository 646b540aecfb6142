class RepositoryException(Exception):
    """Base exception for all repository-related errors."""
    pass

class EntityNotFoundException(RepositoryException):
    """Raised when an entity cannot be found in the repository."""
    pass

class DuplicateEntityException(RepositoryException):
    """Raised when a conditional write finds the key already taken."""
    pass

class InvalidEntityDataException(RepositoryException):
    """Raised when stored entity data is invalid, corrupted or incomplete."""
    pass

class RepositoryOperationException(RepositoryException):
    """Raised when a repository operation fails for any reason not covered by other exceptions."""
    pass

class ConnectionException(RepositoryException):
    """Raised when repository connection or transaction fails or times out."""
    pass
