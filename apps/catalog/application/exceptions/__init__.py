"""Application Exceptions."""

from catalog.application.exceptions.base import ApplicationError
from catalog.application.exceptions.backend import (
    BackendExecutionError,
    ExternalSourceError,
    UnsupportedBackendError,
)

__all__ = [
    "ApplicationError",
    "BackendExecutionError",
    "ExternalSourceError",
    "UnsupportedBackendError",
]
