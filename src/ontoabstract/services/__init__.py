"""
OntoAbstract services.
"""

from .abstraction import Abstractor, abstract

__all__ = [
    "Abstractor",
    "abstract",
]
