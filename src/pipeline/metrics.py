"""Delivery metrics: resume targets checked against actual submissions."""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, ConfigDict

from src.core.schemas import Requirement, ResumeSubmission
from src.pipeline.targets import DEFAULT_RATE_BUCKETS, default_rate_bucket, resolve_target

logger = logging.getLogger(__name__)


class RequirementProgress(BaseModel):
    """Delivered resumes for one requirement against its target."""

    model_config = ConfigDict(frozen=True)

    requirement_id: str
    target: int
    delivered: int

    @property
    def defaulted(self) -> int:
        return max(0, self.target - self.delivered)

    @property
    def completed(self) -> bool:
        return self.delivered >= self.target


class DeliveryMetrics(BaseModel):
    """Totals shown on the recruiter, team and admin dashboards."""

    total_requirements: int
    completed_requirements: int
    resumes_required: int
    resumes_delivered: int
    resumes_defaulted: int
    avg_resumes_per_requirement: str
    requirements_per_recruiter: str
    overall_performance: str


class BucketStats(BaseModel):
    total: int = 0
    completed: int = 0


def requirement_progress(
    requirement: Requirement,
    submissions: Iterable[ResumeSubmission],
) -> RequirementProgress:
    """Count submissions made against ``requirement``."""
    delivered = sum(1 for s in submissions if s.requirement_id == requirement.id)
    return RequirementProgress(
        requirement_id=requirement.id,
        target=resolve_target(requirement.criticality, requirement.toughness),
        delivered=delivered,
    )


def compute_delivery_metrics(
    requirements: Sequence[Requirement],
    submissions: Sequence[ResumeSubmission],
    recruiter_count: int = 0,
) -> DeliveryMetrics:
    """Aggregate targets and deliveries over the active requirements.

    Archived requirements are skipped. Ratios are formatted with two decimals
    and read "0.00" when their divisor is zero.
    """
    active = [r for r in requirements if not r.is_archived]
    delivered_by_req = Counter(s.requirement_id for s in submissions)

    required = 0
    delivered = 0
    completed = 0
    for req in active:
        progress = RequirementProgress(
            requirement_id=req.id,
            target=resolve_target(req.criticality, req.toughness),
            delivered=delivered_by_req[req.id],
        )
        required += progress.target
        delivered += progress.delivered
        if progress.completed:
            completed += 1

    total = len(active)
    metrics = DeliveryMetrics(
        total_requirements=total,
        completed_requirements=completed,
        resumes_required=required,
        resumes_delivered=delivered,
        resumes_defaulted=max(0, required - delivered),
        avg_resumes_per_requirement=_ratio(delivered, total),
        requirements_per_recruiter=_ratio(total, recruiter_count),
        overall_performance="G" if delivered >= required else "R",
    )
    logger.debug(
        "Delivery metrics: %d/%d resumes over %d requirements",
        delivered, required, total,
    )
    return metrics


def default_rate_stats(requirements: Iterable[Requirement]) -> dict[str, BucketStats]:
    """Count requirements and completed requirements per default-rate bucket.

    Archived requirements still count toward their bucket.
    """
    stats = {bucket: BucketStats() for bucket in DEFAULT_RATE_BUCKETS}
    for req in requirements:
        bucket = stats[default_rate_bucket(req.criticality, req.toughness)]
        bucket.total += 1
        if req.status == "completed":
            bucket.completed += 1
    return stats


def _ratio(numerator: int, denominator: int) -> str:
    if denominator <= 0:
        return "0.00"
    return f"{numerator / denominator:.2f}"
