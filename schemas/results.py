"""
Result types returned by the safe entry points.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Literal, Tuple, TypeVar, Union

from .errors import PathItem

T = TypeVar("T")


@dataclass(frozen=True)
class Issue:
    """A single field failure: where it happened and why."""

    path: Tuple[PathItem, ...]
    message: str


@dataclass(frozen=True)
class StructuredError:
    """Ordered list of validation issues, one per failing field."""

    issues: Tuple[Issue, ...]

    @classmethod
    def from_exception(cls, exc: Exception) -> "StructuredError":
        """
        Build from a ``pydantic.ValidationError`` or ``SchemaValidationError``.

        Args:
            exc: Validation error exposing ``errors()`` with ``loc``/``msg`` keys

        Returns:
            StructuredError: Issues in the order the schema reported them
        """
        return cls(
            issues=tuple(
                Issue(path=tuple(error["loc"]), message=error["msg"])
                for error in exc.errors()
            )
        )

    def field_errors(self) -> Dict[str, List[str]]:
        """Group messages by top-level field name; root issues use ``""``."""
        grouped: Dict[str, List[str]] = {}
        for issue in self.issues:
            field = str(issue.path[0]) if issue.path else ""
            grouped.setdefault(field, []).append(issue.message)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable representation."""
        return {
            "issues": [
                {"path": list(issue.path), "message": issue.message}
                for issue in self.issues
            ]
        }


@dataclass(frozen=True)
class Success(Generic[T]):
    """Validation passed; ``data`` holds the validated value."""

    data: T
    success: Literal[True] = True


@dataclass(frozen=True)
class Failure:
    """Validation failed; ``error`` lists the failing fields."""

    error: StructuredError
    success: Literal[False] = False


ValidationOutcome = Union[Success[T], Failure]
