"""Occupancy and relocation schemas."""

from app.schemas.occupancy.occupancy import (
    DeleteRequest,
    TenantSummary,
    CurrentBed,
    CandidateBed,
    RemediationAction,
    Recommendation,
    RelocationPlan,
    RelocationRecord,
    DeletionOutcome,
    PendingPaymentsSummary,
    VacationSummary,
)

__all__ = [
    "DeleteRequest",
    "TenantSummary",
    "CurrentBed",
    "CandidateBed",
    "RemediationAction",
    "Recommendation",
    "RelocationPlan",
    "RelocationRecord",
    "DeletionOutcome",
    "PendingPaymentsSummary",
    "VacationSummary",
]
