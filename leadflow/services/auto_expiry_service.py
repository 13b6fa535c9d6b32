"""Scheduled sweep that retires neglected Lost leads."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leadflow.core.config import get_config
from leadflow.core.exceptions import InternalError
from leadflow.core.logging import LogContext, build_log_event
from leadflow.models import LeadStatus, LostLead, NotTodayReason, PurchaseTimeline
from leadflow.models.base import as_naive_utc, utcnow
from leadflow.services.base_service import BaseService

logger = logging.getLogger(__name__)

AUTO_EXPIRE_MARKER = "Auto-expired"
EXPIRABLE_TIMELINES = (
    PurchaseTimeline.THREE_DAYS,
    PurchaseTimeline.SEVEN_DAYS,
    PurchaseTimeline.THIRTY_DAYS,
)


def auto_expire_reason(days: int) -> str:
    """Reason stored on auto-expired leads. Reads "within 30 days" at the default window
    and names the configured window otherwise.
    """
    return f"{AUTO_EXPIRE_MARKER}: No follow-up within {days} days of expected purchase timeline"


@dataclass
class SweepResult:
    expired_count: int
    leads: list[LostLead] = field(default_factory=list)
    ran_at: datetime | None = None
    cutoff: datetime | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "expired_count": self.expired_count,
            "lead_ids": [lead.id for lead in self.leads],
            "ran_at": self.ran_at.isoformat() if self.ran_at else None,
            "cutoff": self.cutoff.isoformat() if self.cutoff else None,
        }


class AutoExpiryService(BaseService):
    """Marks stale Lost leads with a synthetic reason.

    A lead is expired when it is Lost, untouched for ``expire_after_days``,
    its customer named a future purchase timeline, and it has not been
    expired before. The whole batch commits or rolls back together, and the
    UPDATE re-checks the predicate so overlapping runs never double-count.
    """

    def __init__(self, db: Session | None = None, expire_after_days: int | None = None) -> None:
        super().__init__(db)
        self.expire_after_days = expire_after_days or get_config().AUTO_EXPIRE_DAYS

    def _predicate(self, cutoff: datetime, organization_id: int | None = None) -> list:
        conditions = [
            LostLead.status == LeadStatus.LOST.value,
            LostLead.updated_at < cutoff,
            LostLead.purchase_timeline.in_(EXPIRABLE_TIMELINES),
            or_(LostLead.other_reason.is_(None), ~LostLead.other_reason.contains(AUTO_EXPIRE_MARKER)),
            LostLead.auto_expired_at.is_(None),
        ]
        if organization_id is not None:
            conditions.append(LostLead.organization_id == organization_id)
        return conditions

    def find_expirable(self, now: datetime | None = None, organization_id: int | None = None) -> list[LostLead]:
        ran_at = as_naive_utc(now) if now else utcnow()
        cutoff = ran_at - timedelta(days=self.expire_after_days)
        return (
            self.db.query(LostLead)
            .filter(*self._predicate(cutoff, organization_id))
            .order_by(LostLead.id)
            .all()
        )

    def run(self, now: datetime | None = None, organization_id: int | None = None) -> SweepResult:
        ran_at = as_naive_utc(now) if now else utcnow()
        cutoff = ran_at - timedelta(days=self.expire_after_days)
        log_context = LogContext(
            organization_id=str(organization_id) if organization_id is not None else None,
            task_name="leads.auto_expire",
        )

        candidate_ids = [lead.id for lead in self.find_expirable(ran_at, organization_id)]
        if not candidate_ids:
            logger.info(
                "sweep.nothing_to_expire",
                extra=build_log_event("sweep.nothing_to_expire", log_context, cutoff=cutoff.isoformat()),
            )
            return SweepResult(expired_count=0, leads=[], ran_at=ran_at, cutoff=cutoff)

        stmt = (
            update(LostLead)
            .where(LostLead.id.in_(candidate_ids), *self._predicate(cutoff, organization_id))
            .values(
                not_today_reason=NotTodayReason.OTHER,
                other_reason=auto_expire_reason(self.expire_after_days),
                updated_at=ran_at,
                auto_expired_at=ran_at,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            self.db.execute(stmt)
        except SQLAlchemyError as exc:
            self.rollback()
            logger.exception("sweep.failed", extra=build_log_event("sweep.failed", log_context))
            raise InternalError("Failed to update expired leads") from exc
        self.commit()

        expired = (
            self.db.query(LostLead)
            .filter(LostLead.id.in_(candidate_ids))
            .filter(LostLead.auto_expired_at == ran_at)
            .order_by(LostLead.id)
            .all()
        )
        logger.info(
            "sweep.completed",
            extra=build_log_event(
                "sweep.completed",
                log_context,
                expired_count=len(expired),
                candidates=len(candidate_ids),
                cutoff=cutoff.isoformat(),
            ),
        )
        return SweepResult(expired_count=len(expired), leads=expired, ran_at=ran_at, cutoff=cutoff)


def run_auto_expiry_sweep(
    now: datetime | None = None,
    db: Session | None = None,
    organization_id: int | None = None,
) -> SweepResult:
    """Run one sweep on its own session unless one is supplied."""
    service = AutoExpiryService(db=db)
    try:
        return service.run(now=now, organization_id=organization_id)
    finally:
        if db is None:
            service.close()
