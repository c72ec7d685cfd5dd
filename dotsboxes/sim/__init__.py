"""Simulation headless."""

from .runner import (
    ActionSpace,
    HeadlessEnv,
    StepResult,
    build_default_action_catalog,
    first_legal,
)

__all__ = [
    "ActionSpace",
    "HeadlessEnv",
    "StepResult",
    "build_default_action_catalog",
    "first_legal",
]
