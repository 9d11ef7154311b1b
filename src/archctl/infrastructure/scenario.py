"""Built-in scenario: healthcare data platform cloud migration.

Used as the seed and catalog feeds when no workspace file exists yet.
Two arrangements: the on-premise baseline and a cloud migration forked
from it, where the clinical review service is held in CONFLICT.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from archctl.domain.models import (
    Arrangement,
    ArrangementState,
    ContainerVersion,
    ExternalService,
    Rule,
)
from archctl.domain.types import ServiceType, Severity, ValidationStatus

SCENARIO_EPOCH = datetime(2025, 1, 1, tzinfo=UTC)

CATALOG: tuple[ExternalService, ...] = (
    # Legacy on-premise
    ExternalService(
        id="svc-onprem-db",
        name="Legacy SQL Cluster (On-Prem)",
        type=ServiceType.DATABASE,
        contract_metrics=("High OpEx Maintenance", "99.5% Uptime", "Local Compliance Control"),
    ),
    ExternalService(
        id="svc-onprem-backup",
        name="Tape/Local Backup System",
        type=ServiceType.DATABASE,
        contract_metrics=("DR RTO 48h", "Manual Restore Process", "CapEx Heavy"),
    ),
    ExternalService(
        id="svc-onprem-analytics",
        name="Legacy Reporting Server",
        type=ServiceType.API,
        contract_metrics=("Batch Processing (Overnight)", "Limited Scale"),
    ),
    # Cloud migration (HIPAA)
    ExternalService(
        id="cloud_storage_HIPAA",
        name="Cloud Storage (HIPAA/HITRUST)",
        type=ServiceType.DATABASE,
        contract_metrics=(
            "Cost Reduced 45%",
            "Encryption at Rest",
            "Audit Logging",
            "Infinite Scale",
        ),
    ),
    ExternalService(
        id="cloud_analytics_platform",
        name="Cloud Analytics Platform",
        type=ServiceType.API,
        contract_metrics=(
            "Performance 10x Increase",
            "Predictive Insights",
            "Real-time Processing",
        ),
    ),
    ExternalService(
        id="cloud_backup_DR",
        name="Cloud DR & Failover",
        type=ServiceType.QUEUE,
        contract_metrics=("DR RTO 30min", "Auto-Failover", "99.99% Availability"),
    ),
    # Human/process dependency
    ExternalService(
        id="human_consistency_review",
        name="Clinical Consistency Review",
        type=ServiceType.AUTH,
        contract_metrics=(
            "Manual Validation Required",
            "Cognitive Load: High",
            "Risk: Human Error",
        ),
        evaluation_status=ValidationStatus.UNCERTAIN,
    ),
)

MIGRATION_DRIVERS: tuple[Rule, ...] = (
    Rule(
        id="r_cost",
        description="Infrastructure Cost Efficiency",
        severity=Severity.WARNING,
        matcher="Cost",
    ),
    Rule(
        id="r_dr",
        description="Disaster Recovery Standards",
        severity=Severity.CRITICAL,
        matcher="DR",
    ),
    Rule(
        id="r_perf",
        description="Analytics Performance",
        severity=Severity.WARNING,
        matcher="Performance",
    ),
    Rule(
        id="r_comp",
        description="Regulatory Compliance (HIPAA)",
        severity=Severity.CRITICAL,
        matcher="Compliance",
    ),
    Rule(
        id="r_valid",
        description="Clinical Data Integrity",
        severity=Severity.CRITICAL,
        matcher="Validation",
    ),
)


def _catalog_entry(service_id: str) -> ExternalService:
    return next(s for s in CATALOG if s.id == service_id).clone()


def build_scenario() -> tuple[ArrangementState, tuple[ExternalService, ...]]:
    """Return a fresh ``(state, catalog)`` pair for the built-in scenario."""
    legacy = Arrangement(
        id="arr-legacy",
        name="Legacy On-Premise",
        container=ContainerVersion(
            id="container_legacy_hospital_on_prem",
            version_label="v1.0-Legacy-Baseline",
            hypothesis=(
                "Traditional infrastructure offers maximum control but suffers from "
                "high costs (OpEx) and slow disaster recovery (48h)."
            ),
            # Performance was a constraint of the legacy stack, not a driver.
            active_rules=tuple(r for r in MIGRATION_DRIVERS if r.id != "r_perf"),
        ),
        services=(
            _catalog_entry("svc-onprem-db"),
            _catalog_entry("svc-onprem-backup"),
            _catalog_entry("svc-onprem-analytics"),
        ),
        created_at=SCENARIO_EPOCH,
    )
    cloud = Arrangement(
        id="arr-cloud",
        name="Cloud Migration (HIPAA)",
        container=ContainerVersion(
            id="container_healthcare_cloud_case0",
            version_label="v2.0-Cloud-Migration",
            hypothesis=(
                "Migrating to HIPAA-compliant cloud reduces TCO by 45%, improves DR "
                "to 30min, and boosts analytics 10x."
            ),
            active_rules=MIGRATION_DRIVERS,
        ),
        services=(
            _catalog_entry("cloud_storage_HIPAA"),
            _catalog_entry("cloud_analytics_platform"),
            _catalog_entry("cloud_backup_DR"),
            _catalog_entry("human_consistency_review").with_status(ValidationStatus.CONFLICT),
        ),
        parent_id="arr-legacy",
        created_at=SCENARIO_EPOCH + timedelta(seconds=1),
    )
    state = ArrangementState(arrangements=(legacy, cloud), active_id=legacy.id)
    return state, tuple(s.clone() for s in CATALOG)
