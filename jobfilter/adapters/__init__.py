"""ATS adapters projecting parsed job-board responses onto RawPosting.

This module provides adapters for:
- Greenhouse: greenhouse.GreenhouseAdapter
- Lever: lever.LeverAdapter
- Ashby: ashby.AshbyAdapter

Use the factory functions:
    from jobfilter.adapters import get_adapter, project_many
    postings = project_many("lever", response_json, company="Acme")

Exception handling:
    from jobfilter.adapters import AdapterError, AdapterResponseError
"""

from .ashby import AshbyAdapter
from .base import BaseAdapter
from .exceptions import AdapterConfigurationError, AdapterError, AdapterResponseError
from .factory import SUPPORTED_SOURCES, extract_postings, get_adapter, project_many
from .greenhouse import GreenhouseAdapter
from .lever import LeverAdapter

__all__ = [
    # Base and factory
    "BaseAdapter",
    "get_adapter",
    "extract_postings",
    "project_many",
    "SUPPORTED_SOURCES",
    # Adapters
    "GreenhouseAdapter",
    "LeverAdapter",
    "AshbyAdapter",
    # Exceptions
    "AdapterError",
    "AdapterResponseError",
    "AdapterConfigurationError",
]
