"""loc_check - validates location patterns and reports diagnostics."""

from .checker import CheckResult, check_pattern

__all__ = ["check_pattern", "CheckResult"]
