"""Domain Types - rich types that replace bare primitives across the engine.

Invariants:
    - ModuleKey, StepId, FormulaId wrap str - never pass bare strings through domain logic
    - Digit is a single character in '0'..'9'
    - All valid states encoded as Enums - no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ModuleKey = NewType("ModuleKey", str)
StepId = NewType("StepId", str)
FormulaId = NewType("FormulaId", str)


# ─── Value Types ─────────────────────────────────────────────────

Digit = NewType("Digit", str)            # '0'..'9'
GroupSize = NewType("GroupSize", int)    # 1..guardrails.max_k


# ─── Enums ───────────────────────────────────────────────────────

class CalcMode(str, Enum):
    """Combination ignores ordering of chosen digits; Permutation enumerates all orderings."""
    COMBINATION = "C"
    PERMUTATION = "P"


class VersionStatus(str, Enum):
    """Formula version lifecycle. Transitions are driven outside the engine."""
    DRAFT = "draft"
    ACTIVE = "active"
    DEPRECATED = "deprecated"
    ARCHIVED = "archived"


class CapabilitySeverity(str, Enum):
    INFO = "info"
    WARN = "warn"
    BLOCK = "block"


class InputKind(str, Enum):
    """Shape of the string array a module consumes or produces.

    ALPHABET: single-digit pool (generator input).
    RESULT_SET: already generated groups (filter input, generator output).
    """
    ALPHABET = "alphabet"
    RESULT_SET = "result_set"


class RuntimeStatus(str, Enum):
    OK = "ok"
    BLOCKED = "blocked"


class GuardErrorCode(str, Enum):
    """Machine-readable codes carried by blocked results."""
    INPUT_TOO_LARGE = "INPUT_TOO_LARGE"
    GROUP_SIZE_TOO_LARGE = "GROUP_SIZE_TOO_LARGE"
    ESTIMATE_TOO_LARGE = "ESTIMATE_TOO_LARGE"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    PIPELINE_STEP_BLOCKED = "PIPELINE_STEP_BLOCKED"
    VERSION_ARCHIVED = "VERSION_ARCHIVED"
    NO_ACTIVE_VERSION = "NO_ACTIVE_VERSION"
    VERSION_NOT_FOUND = "VERSION_NOT_FOUND"
