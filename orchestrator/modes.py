"""Intake modes enum."""

from enum import Enum


class IntakeMode(str, Enum):
    """Intake variants; each has its own step map and gating table."""
    GENERIC = "generic"
    DIVORCE_NO_CHILDREN = "divorce_no_children"
    DIVORCE_WITH_CHILDREN = "divorce_with_children"
    CUSTODY_UNMARRIED = "custody_unmarried"
