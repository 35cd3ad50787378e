"""Formula Catalog - semver ordering and version lookup over catalog entries.

Invariants:
    - Only versions with status 'active' are eligible for latest resolution
    - Versions compare numerically by (major, minor, patch); a leading 'v' is ignored
    - Lookups return None when nothing matches - callers decide what that means
"""

from formula_engine.core.domain_types import VersionStatus
from formula_engine.schemas.formula import FormulaEntry, FormulaVersion


def parse_semver(version: str) -> tuple[int, int, int]:
    major, minor, patch = version.strip().removeprefix("v").split(".")
    return int(major), int(minor), int(patch)


def compare_semver(a: str, b: str) -> int:
    """Negative if a < b, zero if equal, positive if a > b."""
    pa, pb = parse_semver(a), parse_semver(b)
    return (pa > pb) - (pa < pb)


def latest_active_version(entry: FormulaEntry) -> FormulaVersion | None:
    active = [v for v in entry.versions if v.status == VersionStatus.ACTIVE]
    if not active:
        return None
    return max(active, key=lambda v: parse_semver(v.version))


def find_version(entry: FormulaEntry, version: str) -> FormulaVersion | None:
    for candidate in entry.versions:
        if candidate.version == version:
            return candidate
    return None


def is_active_or_deprecated(status: VersionStatus | str) -> bool:
    return status in (VersionStatus.ACTIVE, VersionStatus.DEPRECATED)
