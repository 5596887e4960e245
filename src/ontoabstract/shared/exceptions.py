"""
Common exceptions for OntoAbstract.
"""


class OntoAbstractError(Exception):
    """Base exception for all OntoAbstract errors."""
    pass


class ValidationError(OntoAbstractError):
    """Raised when a project or request body cannot be parsed."""
    pass


class ModelGraphError(OntoAbstractError):
    """Raised when a diagram is inconsistent with the model it depicts."""
    pass


class AbstractionError(OntoAbstractError):
    """Raised when an abstraction request cannot be carried out."""
    pass
