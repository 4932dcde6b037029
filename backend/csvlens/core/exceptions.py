"""
Errors surfaced by the profiling and cleaning core.
"""
from typing import Any, Dict, List, Optional


class InvalidInputError(ValueError):
    """
    Raised when a caller hands the core a structurally inconsistent dataset,
    options object, or rule list.

    Everything else (unparsable cells, unknown rule types, odd parameters) is
    absorbed into the result instead of raised.
    """

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {"message": self.message, "errors": self.errors}
