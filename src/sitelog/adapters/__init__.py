"""Adapters - I/O implementations of ports."""

from .rest_backend import RestBackend, RestSiteRepository, BackendError, ConfigurationError
from .file_timesheet import FileTimesheetStore

__all__ = [
    "RestBackend",
    "RestSiteRepository",
    "BackendError",
    "ConfigurationError",
    "FileTimesheetStore",
]
