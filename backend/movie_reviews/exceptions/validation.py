from typing import Dict, List, Optional


class ValidationException(Exception):
    """Raised when a request payload or identifier is missing or malformed.

    ``errors`` lists every offending field, not just the first one found.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}
