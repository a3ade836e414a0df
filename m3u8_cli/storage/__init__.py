"""
Storage Layer.

This package handles everything read from or checked against the local disk
before a run starts: the INI defaults, the header file and the resume filter.
"""

from .config_manager import ConfigManager
from .headers import load_headers
from .resume import filter_existing

__all__ = ["ConfigManager", "filter_existing", "load_headers"]
