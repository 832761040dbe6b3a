"""Service layer: the in-memory services callers interact with."""

from .data_processing import DataProcessingService
from .user_service import UserService

__all__ = ["DataProcessingService", "UserService"]
