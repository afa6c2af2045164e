"""
System endpoints - Task introspection and health
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from frameview.lifecycle.task_registry import TaskRegistry

router = APIRouter(prefix="/system", tags=["System"])


def _task_status(record) -> str:
    if not record.task.done():
        return "running"
    if record.cancelled:
        return "cancelled"
    if record.finished_with_error:
        return "failed"
    return "completed"


@router.get("/tasks/summary")
async def get_task_summary() -> Dict[str, Any]:
    """
    Get high-level task summary.

    Returns:
        - summary: Human-readable summary string
        - total: Tasks currently tracked
        - active: Currently running tasks
        - failed: Tasks that ended with exceptions
        - cancelled: Tasks that were cancelled
    """
    registry = TaskRegistry.instance()
    return {
        "summary": registry.summary(),
        "total": len(registry.list_all()),
        "active": len(registry.active()),
        "failed": len(registry.failed()),
        "cancelled": len(registry.cancelled())
    }


@router.get("/tasks")
async def get_all_tasks() -> Dict[str, Any]:
    """Detailed information about all tracked tasks."""
    records = TaskRegistry.instance().list_all()

    tasks = [
        {
            "id": r.info.id,
            "category": r.info.category.name,
            "description": r.info.description,
            "owner": r.info.owner,
            "created_at": r.info.created_at,
            "status": _task_status(r),
            "error": str(r.finished_with_error) if r.finished_with_error else None,
        }
        for r in records
    ]

    return {
        "count": len(tasks),
        "tasks": tasks
    }


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Health check with task statistics.

    Status is "degraded" when any background task failed.
    """
    registry = TaskRegistry.instance()
    failed = registry.failed()

    status = "healthy"
    reason = None
    if failed:
        status = "degraded"
        reason = f"{len(failed)} background task(s) have failed"

    return {
        "status": status,
        "reason": reason,
        "tasks": {
            "total": len(registry.list_all()),
            "active": len(registry.active()),
            "failed": len(failed),
            "cancelled": len(registry.cancelled()),
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
