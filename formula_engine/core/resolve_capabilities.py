"""Capability Resolver - lifecycle status to what a formula version may do.

Invariants:
    - PURE: capabilities are derived on every call, never stored
    - The table below is exhaustive for the four known statuses
    - Any other status string resolves to the permissive default (no message)
    - No transition logic lives here; transitions are authorized elsewhere

    status      compute copy  consent blocked severity message
    draft       yes     no    no      no      warn     "Testing / Preview only"
    active      yes     yes   no      no      info     "Locked" | "Active"
    deprecated  yes     no    yes     no      warn     "Deprecated — consent required"
    archived    no      no    no      yes     block    "Archived — panel disabled"
"""

from formula_engine.core.domain_types import CapabilitySeverity, VersionStatus
from formula_engine.schemas.formula import FormulaCapabilities


def resolve_capabilities(
    status: VersionStatus | str | None, is_locked: bool = False,
) -> FormulaCapabilities:
    match status:
        case VersionStatus.DRAFT:
            return FormulaCapabilities(
                can_compute=True,
                can_copy=False,
                requires_consent=False,
                is_blocked=False,
                severity=CapabilitySeverity.WARN,
                message="Testing / Preview only",
            )
        case VersionStatus.ACTIVE:
            return FormulaCapabilities(
                can_compute=True,
                can_copy=True,
                requires_consent=False,
                is_blocked=False,
                severity=CapabilitySeverity.INFO,
                message="Locked" if is_locked else "Active",
            )
        case VersionStatus.DEPRECATED:
            return FormulaCapabilities(
                can_compute=True,
                can_copy=False,
                requires_consent=True,
                is_blocked=False,
                severity=CapabilitySeverity.WARN,
                message="Deprecated — consent required",
            )
        case VersionStatus.ARCHIVED:
            return FormulaCapabilities(
                can_compute=False,
                can_copy=False,
                requires_consent=False,
                is_blocked=True,
                severity=CapabilitySeverity.BLOCK,
                message="Archived — panel disabled",
            )
        case _:
            return FormulaCapabilities(
                can_compute=True,
                can_copy=True,
                requires_consent=False,
                is_blocked=False,
                severity=CapabilitySeverity.INFO,
            )
