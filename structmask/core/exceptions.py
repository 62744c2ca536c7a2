"""StructMask exception hierarchy.

Every error raised by the library derives from :class:`StructMaskError`, which
carries a machine-readable error code and a context dictionary that can be fed
straight into structured logging. Errors that also have a natural builtin
counterpart (``KeyError`` for lookups, ``TypeError`` for bad inputs) inherit
from it as well so callers can catch either.
"""

from typing import Any, Dict, List, Optional


class StructMaskError(Exception):
    """Base exception for all StructMask errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        context: Additional error context and metadata
        recovery_suggestions: List of suggested recovery actions
        component: Component where the error originated
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        component: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._default_error_code()
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.component = component or self._infer_component()

    def __str__(self) -> str:
        return self.message

    def _default_error_code(self) -> str:
        """Generate default error code based on exception class name."""
        return self.__class__.__name__.upper().replace("ERROR", "_ERROR")

    def _infer_component(self) -> str:
        """Infer component name from exception class."""
        name = self.__class__.__name__.lower()
        if "strategy" in name:
            return "registry"
        elif "record" in name:
            return "engine"
        elif "schema" in name:
            return "schema"
        elif "configuration" in name:
            return "config"
        else:
            return "core"

    def add_context(self, key: str, value: Any) -> None:
        """Add additional context to the error."""
        self.context[key] = value

    def add_recovery_suggestion(self, suggestion: str) -> None:
        """Add a recovery suggestion to help users resolve the error."""
        if suggestion not in self.recovery_suggestions:
            self.recovery_suggestions.append(suggestion)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to structured dictionary for logging/reporting."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "component": self.component,
            "context": self.context,
            "recovery_suggestions": self.recovery_suggestions,
        }


class StrategyNotFoundError(StructMaskError, KeyError):
    """Raised when a registry lookup names a method that is not registered."""

    def __init__(self, method: str, available: Optional[List[str]] = None, **kwargs):
        super().__init__(f"Masking method '{method}' is not registered", **kwargs)
        self.method = method
        self.add_context("method", method)
        if available is not None:
            self.add_context("available_methods", sorted(available))


class StrategyRegistrationError(StructMaskError, TypeError):
    """Raised when an object cannot be registered as a masking strategy."""

    def __init__(self, message: str, name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        if name is not None:
            self.add_context("method", name)


class RecordTypeError(StructMaskError, TypeError):
    """Raised when the value handed to the engine is not a record instance.

    Records are dataclass instances, pydantic models and named tuples.
    """

    def __init__(self, value: Any, message: Optional[str] = None, **kwargs):
        type_name = type(value).__name__
        if message is None and isinstance(value, type):
            message = (
                f"Expected a record instance, got the class {value.__name__}"
            )
        elif message is None:
            message = f"Expected a record instance, got {type_name}"
        super().__init__(message, **kwargs)
        self.add_context("actual_type", type_name)
        self.add_recovery_suggestion(
            "Pass an instance of a dataclass, pydantic model or NamedTuple"
        )


class SchemaError(StructMaskError):
    """Raised when an explicit record schema is malformed or does not fit its type."""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        field_name: Optional[str] = None,
        schema_file: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if record_type:
            self.add_context("record_type", record_type)
        if field_name:
            self.add_context("field_name", field_name)
        if schema_file:
            self.add_context("schema_file", schema_file)


class ConfigurationError(StructMaskError):
    """Raised when configuration is invalid or cannot be loaded."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        config_section: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        if config_file:
            self.add_context("config_file", config_file)
        if config_section:
            self.add_context("config_section", config_section)
