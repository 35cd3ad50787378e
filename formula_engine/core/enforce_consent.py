"""Copy/Consent Enforcement - gates the "copy result" affordance on capabilities.

Invariants:
    - check_copy_allowed is PURE: returns error dict or None, never mutates the ledger
    - Blocked panels are reported before consent; consent before plain copy refusal
    - A deprecated version becomes copyable once consent for its key is granted
    - ConsentLedger is per-caller state; the engine keeps no global consent cache
"""

from dataclasses import dataclass, field

from formula_engine.schemas.formula import FormulaCapabilities


def consent_key(formula_id: str, version: str) -> str:
    return f"{formula_id}@{version}"


@dataclass
class ConsentLedger:
    """Consent granted by one user/session - pure dataclass, no IO."""

    granted: set[str] = field(default_factory=set)

    def has_consent(self, key: str) -> bool:
        return key in self.granted

    def grant(self, key: str) -> None:
        self.granted.add(key)


def check_copy_allowed(
    capabilities: FormulaCapabilities, ledger: ConsentLedger, key: str,
) -> dict | None:
    if capabilities.is_blocked:
        return {
            "status": "error",
            "error_code": "PANEL_BLOCKED",
            "message": capabilities.message or "Formula panel disabled",
        }
    if capabilities.requires_consent:
        if ledger.has_consent(key):
            return None
        return {
            "status": "error",
            "error_code": "CONSENT_REQUIRED",
            "message": f"Explicit consent required before copying results of {key}",
            "consent_key": key,
        }
    if not capabilities.can_copy:
        return {
            "status": "error",
            "error_code": "COPY_NOT_ALLOWED",
            "message": capabilities.message or "Copy not allowed",
        }
    return None
