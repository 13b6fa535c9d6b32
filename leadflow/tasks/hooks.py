"""Lifecycle hooks for queue task execution."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from leadflow.core.logging import LogContext, build_log_event


def _context_fields(task_key: str, context: dict[str, Any]) -> LogContext:
    organization_id = context.get("organization_id")
    return LogContext(
        organization_id=str(organization_id) if organization_id is not None else None,
        task_name=task_key,
        trace_id=context.get("trace_id"),
    )


def before_task(task_key: str, context: dict[str, Any]) -> dict[str, Any]:
    """Build pre-task log payload."""
    return build_log_event(event="task.start", context=_context_fields(task_key, context))


def after_task(task_key: str, context: dict[str, Any], status: str, **fields: Any) -> dict[str, Any]:
    """Build post-task log payload."""
    return build_log_event(
        event="task.finish",
        context=_context_fields(task_key, context),
        status=status,
        finished_at=datetime.now(timezone.utc).isoformat(),
        **fields,
    )
