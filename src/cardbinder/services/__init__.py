"""Service layer — operations returning ServiceResult.

Services may import from domain and infrastructure layers.
"""

from cardbinder.services.locator import LocatorService
from cardbinder.services.result import ServiceError, ServiceResult

__all__ = ["LocatorService", "ServiceError", "ServiceResult"]
