"""Exceptions raised by the planning core."""

from __future__ import annotations


class PlannerError(RuntimeError):
    """Base class for errors surfaced by the planner."""


class InvalidInputError(PlannerError, ValueError):
    """Raised when a task, duration or deadline fails validation."""


class UnschedulableConfigurationError(PlannerError):
    """Raised when no working day can be reached within the lookback window."""


__all__ = ["PlannerError", "InvalidInputError", "UnschedulableConfigurationError"]
