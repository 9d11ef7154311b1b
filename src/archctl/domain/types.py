"""Closed enumerations shared across the entity model.

Every judgment the engine reports is one of these values. Evaluation
status is always supplied externally; rule status is always derived.
"""

from __future__ import annotations

from enum import StrEnum


class ServiceType(StrEnum):
    """Kind of external service an arrangement depends on."""

    DATABASE = "DATABASE"
    API = "API"
    QUEUE = "QUEUE"
    AUTH = "AUTH"


class ValidationStatus(StrEnum):
    """Evidence state of a single service's contract."""

    VALIDATED = "VALIDATED"
    UNCERTAIN = "UNCERTAIN"
    CONFLICT = "CONFLICT"


class RuleStatus(StrEnum):
    """Aggregate verdict of one rule against an arrangement."""

    SATISFIED = "SATISFIED"
    VIOLATED = "VIOLATED"
    NOT_EVALUABLE = "NOT_EVALUABLE"


class Severity(StrEnum):
    """Rule severity. Only CRITICAL rules are violated by missing evidence."""

    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
