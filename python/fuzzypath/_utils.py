"""Internal utilities for fuzzypath."""

from typing import Optional, Union

from fuzzypath._core import ValidationError
from fuzzypath.enums import CaseMode

# Valid case mode names (lowercase)
VALID_CASE_MODES = frozenset(mode.value for mode in CaseMode)


def normalize_case_mode(case_mode: Union[str, CaseMode]) -> CaseMode:
    """Convert a case mode name to a CaseMode, validating strings.

    Args:
        case_mode: Either a CaseMode value or its string name.

    Returns:
        The matching CaseMode member.

    Raises:
        ValidationError: If the name is not recognized.
        TypeError: If case_mode is not a string or CaseMode.

    Example:
        >>> normalize_case_mode("SMART")
        <CaseMode.SMART: 'smart'>
        >>> normalize_case_mode(CaseMode.IGNORE)
        <CaseMode.IGNORE: 'ignore'>
    """
    if isinstance(case_mode, CaseMode):
        return case_mode

    if isinstance(case_mode, str):
        mode_lower = case_mode.lower()
        if mode_lower in VALID_CASE_MODES:
            return CaseMode(mode_lower)
        raise ValidationError(
            f"Unknown case mode: '{case_mode}'. Valid options: {sorted(VALID_CASE_MODES)}"
        )

    raise TypeError(f"case_mode must be str or CaseMode enum, got {type(case_mode).__name__}")


def normalize_limit(limit: Optional[int]) -> Optional[int]:
    """Map ``None`` and ``0`` to "no limit" and reject negative limits."""
    if limit is None or limit == 0:
        return None
    if limit < 0:
        raise ValidationError(f"limit must be non-negative, got {limit}")
    return limit


def ensure_text(value: object, name: str) -> str:
    """Return ``value`` if it is a string, raise TypeError otherwise."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {type(value).__name__}")
    return value


__all__ = ["VALID_CASE_MODES", "ensure_text", "normalize_case_mode", "normalize_limit"]
