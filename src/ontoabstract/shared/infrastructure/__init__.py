"""
Shared infrastructure components for OntoAbstract.

Currently limited to logging setup; the abstraction engine works fully
in-process and needs no database, cache or remote clients.
"""

from .monitoring.logger import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
