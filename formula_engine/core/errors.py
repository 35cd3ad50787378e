"""Error Hierarchy - typed, categorized exceptions for all engine failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ConfigurationError subclasses are deployment defects and propagate past the engine
    - InvalidParameterError and StepBlockedError never leave the runtime: they are
      converted into blocked results
    - to_response() produces the envelope outer layers serialize

Design Decisions:
    - Single hierarchy with FormulaEngineError base: one except clause at the host boundary
    - ErrorContext as dataclass: rich observability without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    GUARDRAIL = "guardrail"
    RESOURCE_NOT_FOUND = "resource_not_found"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    module_key: str | None = None
    step_id: str | None = None
    debug_info: dict[str, Any] | None = None


class FormulaEngineError(Exception):
    """Base exception for all engine errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_response(self) -> dict:
        """Convert to the standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "module_key": self.context.module_key,
                    "step_id": self.context.step_id,
                },
            }
        }


# ─── Configuration Errors (fatal) ───────────────────────────────

class ConfigurationError(FormulaEngineError):
    """Deployment/config defect. Aborts the whole computation."""
    def __init__(
        self, message: str, code: str = "CONFIGURATION_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context,
        )


class UnknownModuleError(ConfigurationError):
    """A module key is absent from the registry."""
    def __init__(self, module_key: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.module_key = module_key
        super().__init__(
            f"Module '{module_key}' not found", "UNKNOWN_MODULE", ctx,
        )
        self.module_key = module_key


class DuplicateModuleError(ConfigurationError):
    """Two modules registered under the same key."""
    def __init__(self, module_key: str):
        super().__init__(
            f"Module '{module_key}' registered twice", "DUPLICATE_MODULE",
            ErrorContext(module_key=module_key),
        )
        self.module_key = module_key


class PipelineShapeError(ConfigurationError):
    """Adjacent pipeline steps disagree on the shape of the data they exchange."""
    def __init__(
        self, step_id: str, module_key: str, expected: str, actual: str,
    ):
        super().__init__(
            f"Step '{step_id}' ({module_key}) expects {expected} input "
            f"but receives {actual}",
            "PIPELINE_SHAPE_MISMATCH",
            ErrorContext(module_key=module_key, step_id=step_id),
        )
        self.step_id = step_id
        self.expected = expected
        self.actual = actual


# ─── Recoverable Errors (converted to blocked results) ──────────

class InvalidParameterError(FormulaEngineError):
    """Module params missing or of the wrong shape."""
    def __init__(
        self, module_key: str, details: list[str],
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.module_key = module_key
        ctx.debug_info = {"details": details}
        super().__init__(
            f"Invalid parameters for '{module_key}': {'; '.join(details)}",
            "INVALID_PARAMETER", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx,
        )
        self.module_key = module_key
        self.details = details


class StepBlockedError(FormulaEngineError):
    """A pipeline step was rejected by its own guardrails."""
    def __init__(
        self, step_id: str, module_key: str, reason: str,
        estimate: int | None = None, error_code: str | None = None,
    ):
        super().__init__(
            f"Step '{step_id}' blocked: {reason}",
            "PIPELINE_STEP_BLOCKED", ErrorCategory.GUARDRAIL,
            ErrorSeverity.WARNING,
            ErrorContext(module_key=module_key, step_id=step_id),
        )
        self.step_id = step_id
        self.module_key = module_key
        self.reason = reason
        self.estimate = estimate
        self.error_code = error_code
