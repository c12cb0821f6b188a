"""Queue preview renders and deliver only the most recent result."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QThreadPool, Signal, Slot

from ..core.filters import FilterPipeline
from ..core.image_buffer import ImageBuffer
from ..core.session import EditSession
from .preview_render_worker import PreviewRenderWorker

_LOGGER = logging.getLogger(__name__)


class PreviewScheduler(QObject):
    """Run :class:`PreviewRenderWorker` jobs on a thread pool.

    Every submission receives a larger job id than the one before.  Results
    are re-emitted through :attr:`previewReady` only when they belong to the
    newest submission, so a slow render can never overwrite a newer one.
    """

    previewReady = Signal(object, int)
    """Emitted with the rendered :class:`ImageBuffer` (or ``None``) and its job id."""

    def __init__(
        self,
        pipeline: FilterPipeline,
        parent: QObject | None = None,
        *,
        thread_pool: QThreadPool | None = None,
    ) -> None:
        super().__init__(parent)
        self._pipeline = pipeline
        self._thread_pool = thread_pool if thread_pool is not None else QThreadPool(self)
        self._latest_job_id = 0
        self._active_workers: dict[int, PreviewRenderWorker] = {}

    @property
    def latest_job_id(self) -> int:
        return self._latest_job_id

    @property
    def pending_jobs(self) -> int:
        return len(self._active_workers)

    def submit(self, preview: ImageBuffer, session: EditSession) -> int:
        """Schedule a render of *preview* with the current state of *session*."""

        attributes = session.attributes
        self._latest_job_id += 1
        job_id = self._latest_job_id
        worker = PreviewRenderWorker(
            self._pipeline,
            preview,
            rotation_radians=session.rotation_radians,
            params=session.color_parameters(),
            filter_id=attributes.applied_filter_id,
            job_id=job_id,
        )
        worker.signals.finished.connect(self._handle_finished)
        self._active_workers[job_id] = worker
        self._thread_pool.start(worker)
        return job_id

    def wait_for_done(self, msecs: int = -1) -> bool:
        """Block until every queued render finished (mainly for shutdown)."""

        return self._thread_pool.waitForDone(msecs)

    @Slot(object, int)
    def _handle_finished(self, result: object, job_id: int) -> None:
        self._active_workers.pop(job_id, None)
        if job_id != self._latest_job_id:
            _LOGGER.debug(
                "Dropping superseded preview job %d (latest is %d)", job_id, self._latest_job_id
            )
            return
        self.previewReady.emit(result, job_id)


__all__ = ["PreviewScheduler"]
