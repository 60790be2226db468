"""Job orchestration - job management and tracking."""

from .job_manager import Job, JobManager, JobStatus, get_job_manager, status_from_run

__all__ = ["JobManager", "Job", "JobStatus", "get_job_manager", "status_from_run"]
