"""
Job status constants and enumerations.

Centralized job status definitions to replace magic strings throughout codebase.
"""

from enum import Enum


class JobStatus(Enum):
    """Enumeration of all possible job statuses."""

    PENDING = "pending"
    PLANNING = "planning"
    GENERATING = "generating"
    COMPLETED = "completed"
    PARTIAL = "partial"  # stopped by an error after at least one module finished
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """Check if this status is a terminal state (no further progress)."""
        return self in (JobStatus.COMPLETED, JobStatus.PARTIAL, JobStatus.FAILED)

    def is_in_progress(self) -> bool:
        """Check if this status indicates active processing."""
        return self in (JobStatus.PLANNING, JobStatus.GENERATING)


__all__ = ["JobStatus"]
