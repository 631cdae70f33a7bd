from fastapi import status

class BaseAppException(Exception):
    """Base exception for application"""
    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class UserNotFoundException(BaseAppException):
    """Raised when user is not found"""
    def __init__(self, message: str = "User not found."):
        super().__init__(message, status.HTTP_404_NOT_FOUND)

class InvalidCredentialsException(BaseAppException):
    """Raised when credentials are invalid"""
    def __init__(self, message: str = "Invalid credentials."):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)

class ConfigurationException(BaseAppException):
    """Raised when token signing configuration is unusable"""
    def __init__(self, message: str = "Token signing configuration is invalid"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)
