"""Shared timeline event helper utilities."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def domain_build_stage_event(
    stage: str,
    status: str,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one structured timeline event payload.

    Args:
        stage: Stage name, for example `resolve_workflow` or `submit_queue_entry`.
        status: Stage status marker (`started`, `completed`, `failed`).
        details: Optional structured details object.

    Returns:
        dict[str, object]: Structured timeline event.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    event_payload: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if details is not None:
        event_payload["details"] = dict(details)
    return event_payload


def domain_iso8601_timestamp(moment: datetime | None = None) -> str:
    """Render a timestamp in ISO-8601 with second precision and UTC offset.

    Args:
        moment: Optional timestamp; naive values are treated as UTC. Defaults to now.

    Returns:
        str: ISO-8601 timestamp such as `2026-10-19T08:15:00+00:00`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    resolved_moment = moment or datetime.now(timezone.utc)
    if resolved_moment.tzinfo is None:
        resolved_moment = resolved_moment.replace(tzinfo=timezone.utc)
    return resolved_moment.isoformat(timespec="seconds")
