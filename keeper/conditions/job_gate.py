from __future__ import annotations

from datetime import datetime, timezone

from keeper.chain.errors import JobExpiredError, JobNotReadyError

from .types import Job


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def validate_job_interval(job: Job, now: datetime | None = None) -> bool:
    if job.last_executed is None:
        return True

    elapsed = (_now(now) - job.last_executed).total_seconds()
    return elapsed >= job.interval_seconds


def validate_job_time_frame(job: Job, now: datetime | None = None) -> tuple[bool, str]:
    if job.time_frame_seconds <= 0:
        return True, ""

    age = (_now(now) - job.created_at).total_seconds()
    if age > job.time_frame_seconds:
        return False, f"job expired: age {round(age)}s exceeds time frame {job.time_frame_seconds} seconds"

    return True, ""


def ensure_job_ready(job: Job, now: datetime | None = None) -> None:
    current = _now(now)

    if not validate_job_interval(job, current):
        elapsed = (current - job.last_executed).total_seconds() if job.last_executed else 0.0
        raise JobNotReadyError(
            f"job interval validation failed: {elapsed:.0f}s elapsed of {job.interval_seconds}s interval"
        )

    valid, message = validate_job_time_frame(job, current)
    if not valid:
        raise JobExpiredError(
            message,
            age_seconds=(current - job.created_at).total_seconds(),
            time_frame_seconds=job.time_frame_seconds,
        )
