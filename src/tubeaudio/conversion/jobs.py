"""Background conversion jobs.

A job runs the same pipeline as a synchronous conversion but returns to the
caller immediately; progress is observed by polling the job record.
"""

import asyncio
from datetime import UTC, datetime
from enum import StrEnum

import structlog
from pydantic import Field

from tubeaudio.catalog.models import CatalogModel, new_id
from tubeaudio.conversion.orchestrator import ConversionOrchestrator
from tubeaudio.exceptions import NotFoundError, TubeAudioError, ValidationError

logger = structlog.get_logger(__name__)


class JobStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ConversionJob(CatalogModel):
    """State of one background conversion."""

    id: str = Field(default_factory=new_id)
    source_url: str
    category: str | None = None
    status: JobStatus = JobStatus.PENDING
    audio_id: str | None = None
    error: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None


class ConversionJobManager:
    """Schedules conversions on worker threads, at most ``max_concurrent`` at once.

    Only the ``max_retained`` most recently finished jobs are remembered.
    """

    def __init__(
        self,
        orchestrator: ConversionOrchestrator,
        max_concurrent: int = 2,
        max_retained: int = 100,
    ) -> None:
        self.orchestrator = orchestrator
        self.max_concurrent = max(1, max_concurrent)
        self.max_retained = max(0, max_retained)
        self._semaphore = asyncio.Semaphore(self.max_concurrent)
        self._jobs: dict[str, ConversionJob] = {}
        self._tasks: dict[str, asyncio.Task] = {}

    async def submit(self, source_url: str | None, category: str | None = None) -> ConversionJob:
        """Queue a conversion and return its job record without waiting.

        Raises:
            ValidationError: If ``source_url`` is empty
        """
        if not source_url or not source_url.strip():
            raise ValidationError("Missing url")
        job = ConversionJob(source_url=source_url.strip(), category=category)
        self._jobs[job.id] = job
        task = asyncio.create_task(self._run(job))
        self._tasks[job.id] = task
        task.add_done_callback(lambda _: self._tasks.pop(job.id, None))
        logger.info("Conversion job queued", job_id=job.id, source_url=job.source_url)
        return job

    def get(self, job_id: str) -> ConversionJob:
        job = self._jobs.get(job_id)
        if job is None:
            raise NotFoundError("job", job_id)
        return job

    def list_jobs(self) -> list[ConversionJob]:
        return sorted(self._jobs.values(), key=lambda job: job.created_at, reverse=True)

    async def wait(self, job_id: str) -> ConversionJob:
        """Block until the job finishes and return its final state."""
        job = self.get(job_id)
        task = self._tasks.get(job_id)
        if task is not None:
            await asyncio.shield(task)
        return job

    async def shutdown(self) -> None:
        """Cancel jobs that have not reached a worker thread yet.

        Jobs already running in a thread finish on their own; their catalog
        entries are still written.
        """
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, job: ConversionJob) -> None:
        async with self._semaphore:
            job.status = JobStatus.RUNNING
            try:
                result = await asyncio.to_thread(
                    self.orchestrator.convert, job.source_url, job.category
                )
            except TubeAudioError as e:
                job.status = JobStatus.FAILED
                job.error = e.message
                logger.warning("Conversion job failed", job_id=job.id, error=e.message)
            except Exception as e:
                job.status = JobStatus.FAILED
                job.error = str(e)
                logger.exception("Conversion job crashed", job_id=job.id)
            else:
                job.status = JobStatus.SUCCEEDED
                job.audio_id = result.audio.id
                logger.info("Conversion job finished", job_id=job.id, audio_id=job.audio_id)
            finally:
                job.finished_at = datetime.now(UTC)
                self._prune_finished()

    def _prune_finished(self) -> None:
        finished = [job for job in self._jobs.values() if job.finished_at is not None]
        excess = len(finished) - self.max_retained
        if excess <= 0:
            return
        finished.sort(key=lambda job: job.finished_at)
        for job in finished[:excess]:
            del self._jobs[job.id]
