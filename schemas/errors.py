"""
Validation error types.

pydantic raises ``pydantic.ValidationError`` on its own. Custom schemas (any
object with a ``validate`` method) raise ``SchemaValidationError`` to report
field issues in the same shape.
"""

from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

from pydantic import ValidationError

PathItem = Union[str, int]


class SchemaValidationError(ValueError):
    """Raised by custom schemas when one or more fields fail validation."""

    def __init__(self, issues: Iterable[Tuple[Sequence[PathItem], str]]):
        self.issues = [(tuple(path), message) for path, message in issues]
        summary = "; ".join(
            f"{'.'.join(str(p) for p in path) or '<root>'}: {message}"
            for path, message in self.issues
        )
        super().__init__(
            f"{len(self.issues)} validation error(s): {summary}"
        )

    def errors(self) -> List[Dict[str, Any]]:
        """Issues in the same dict layout as ``pydantic.ValidationError.errors()``."""
        return [{"loc": path, "msg": message} for path, message in self.issues]


# Errors the safe entry points turn into a Failure result
VALIDATION_ERRORS = (ValidationError, SchemaValidationError)
