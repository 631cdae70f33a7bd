from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from dataclasses import dataclass

@dataclass
class ApiClientConfig:
    """Configuration class for the movie comments API client"""
    base_url: str = "http://localhost:8000"
    timeout: int = 30

class ApiResponse:
    """Response wrapper for API calls"""
    def __init__(self, data: Any, status_code: int, success: bool):
        self.data = data
        self.status_code = status_code
        self.success = success

class ApiClientError(Exception):
    """Custom exception for API client errors"""
    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class ApiClientInterface(ABC):
    """Abstract interface for the movie comments API client"""

    @abstractmethod
    def make_request(self, method: str, endpoint: str, json: Optional[Dict] = None,
                     authenticated: bool = False) -> ApiResponse:
        pass
