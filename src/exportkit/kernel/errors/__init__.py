"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   ├── InvariantViolationError
    │   └── ValidationError
    ├── ApplicationError     (application.py)
    └── InfrastructureError  (infrastructure.py)
        └── StorageError
"""

from exportkit.kernel.errors.application import ApplicationError
from exportkit.kernel.errors.base import BaseError
from exportkit.kernel.errors.domain import (
    DomainError,
    InvariantViolationError,
    ValidationError,
)
from exportkit.kernel.errors.infrastructure import InfrastructureError, StorageError

__all__ = [
    "ApplicationError",
    "BaseError",
    "DomainError",
    "InfrastructureError",
    "InvariantViolationError",
    "StorageError",
    "ValidationError",
]
