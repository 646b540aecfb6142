class AuthException(Exception):
    """Base exception for authentication errors"""
    pass

class UserAlreadyExistsException(AuthException):
    """Raised when attempting to register an email that already has an account"""
    pass

class InvalidCredentialsException(AuthException):
    """Raised when sign-in credentials are invalid or the account does not exist"""
    pass
