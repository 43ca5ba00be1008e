"""stencil_lens error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parsing

Request paths never raise these; they surface at construction time
(loading configuration, loading a grammar).
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    CONFIG_INVALID_VALUE = 2001

    GRAMMAR_UNAVAILABLE = 3001


@dataclass(frozen=True)
class StencilLensError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(StencilLensError):
    """Plugin configuration could not be validated."""

    @classmethod
    def invalid_value(cls, field_name: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field_name}': {reason}",
            details={"field": field_name, "value": str(value), "reason": reason},
        )


class GrammarError(StencilLensError):
    """A tree-sitter grammar could not be loaded."""

    @classmethod
    def unavailable(cls, grammar: str, reason: str) -> "GrammarError":
        return cls(
            code=ErrorCode.GRAMMAR_UNAVAILABLE,
            message=f"Could not load the {grammar} grammar: {reason}",
            details={"grammar": grammar, "reason": reason},
        )
