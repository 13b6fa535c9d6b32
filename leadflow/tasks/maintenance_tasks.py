"""Scheduled maintenance tasks."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from leadflow.core.exceptions import LeadFlowException
from leadflow.database.db import get_db_session
from leadflow.services.auto_expiry_service import run_auto_expiry_sweep
from leadflow.tasks.celery_app import celery_app
from leadflow.tasks.hooks import after_task, before_task

logger = logging.getLogger(__name__)

AUTO_EXPIRE_TASK = "leads.auto_expire"


def run_auto_expire(organization_id: int | None = None) -> dict[str, Any]:
    """Run one auto-expiry sweep and return its summary."""
    context = {"organization_id": organization_id, "trace_id": uuid.uuid4().hex}
    logger.info("task.start", extra=before_task(task_key=AUTO_EXPIRE_TASK, context=context))
    try:
        with get_db_session() as db:
            result = run_auto_expiry_sweep(db=db, organization_id=organization_id)
    except LeadFlowException:
        logger.exception(
            "task.finish",
            extra=after_task(task_key=AUTO_EXPIRE_TASK, context=context, status="failed"),
        )
        raise

    summary = result.as_dict()
    logger.info(
        "task.finish",
        extra=after_task(
            task_key=AUTO_EXPIRE_TASK,
            context=context,
            status="succeeded",
            expired_count=result.expired_count,
        ),
    )
    return summary


@celery_app.task(name=AUTO_EXPIRE_TASK)
def auto_expire_leads_task(organization_id: int | None = None) -> dict[str, Any]:
    return run_auto_expire(organization_id=organization_id)
