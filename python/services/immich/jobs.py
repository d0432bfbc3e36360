"""
Backend job polling.

Waits for a named job queue to go idle, bounded by a retry ceiling.
A job that never quiesces is logged and the caller proceeds anyway.
"""

import time
from typing import Callable, Optional

from core.exceptions import BackendError
from core.logging import get_logger
from core.responses import AdvisoryResult
from infrastructure.immich_client import ImmichClient
from models.domain.job import JobStatus, parse_job_statuses

logger = get_logger(__name__)


class JobPoller:
    """
    Bounded wait on backend job queues.

    Total blocking per call is at most ``max_retries * interval`` seconds
    plus request latency.
    """

    def __init__(
        self,
        client: ImmichClient,
        max_retries: int = 10,
        interval: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.client = client
        self.max_retries = max_retries
        self.interval = interval
        self._sleep = sleep

    def ensure_idle(self, job_name: str) -> AdvisoryResult:
        """
        Start ``job_name`` if idle, then wait until it is idle again.

        Returns:
            AdvisoryResult; ok=False when the job was still active after
            the retry budget or the backend could not be reached.
        """
        operation = f"ensure_idle:{job_name}"
        attempts = 0
        try:
            active = self._is_active(job_name)
            if not active:
                active = self._start(job_name).is_active

            while active and attempts < self.max_retries:
                self._sleep(self.interval)
                attempts += 1
                active = self._is_active(job_name)
        except BackendError as e:
            logger.warning(f"[JobPoller] {job_name}: polling aborted: {e.message}")
            return AdvisoryResult.failure(operation, e.message, attempts)

        if active:
            logger.warning(
                f"[JobPoller] {job_name} still active after {attempts} retries, continuing"
            )
            return AdvisoryResult.failure(operation, "job still active", attempts)

        logger.debug(f"[JobPoller] {job_name} idle after {attempts} retries")
        return AdvisoryResult.success(operation, attempts)

    def trigger(self, job_name: str) -> AdvisoryResult:
        """Start ``job_name`` without waiting for it."""
        operation = f"trigger:{job_name}"
        try:
            self._start(job_name)
        except BackendError as e:
            logger.warning(f"[JobPoller] Failed to trigger {job_name}: {e.message}")
            return AdvisoryResult.failure(operation, e.message)
        return AdvisoryResult.success(operation)

    def _is_active(self, job_name: str) -> bool:
        status: Optional[JobStatus] = parse_job_statuses(self.client.get_jobs()).get(job_name)
        if status is None:
            logger.warning(f"[JobPoller] Unknown job '{job_name}', treating as idle")
            return False
        return status.is_active

    def _start(self, job_name: str) -> JobStatus:
        # force=False: a job queued from elsewhere is not restarted
        return JobStatus.model_validate(self.client.start_job(job_name, force=False))
