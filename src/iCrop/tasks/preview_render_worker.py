"""Worker that renders edit previews on a background thread."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QRunnable, Signal

from ..core.attributes import ColorParameters
from ..core.filters import FilterPipeline
from ..core.image_buffer import ImageBuffer

_LOGGER = logging.getLogger(__name__)


class PreviewRenderSignals(QObject):
    """Signals emitted by :class:`PreviewRenderWorker`."""

    finished = Signal(object, int)
    """Emitted with the rendered :class:`ImageBuffer` (or ``None``) and the job id."""


class PreviewRenderWorker(QRunnable):
    """Apply rotation, filter and colour controls using ``FilterPipeline.apply``."""

    def __init__(
        self,
        pipeline: FilterPipeline,
        buffer: ImageBuffer,
        *,
        rotation_radians: float,
        params: ColorParameters | None,
        filter_id: str | None,
        job_id: int,
    ) -> None:
        super().__init__()
        self._pipeline = pipeline
        self._buffer = buffer
        self._rotation_radians = float(rotation_radians)
        self._params = params
        self._filter_id = filter_id
        self._job_id = int(job_id)
        self.signals = PreviewRenderSignals()

    @property
    def job_id(self) -> int:
        return self._job_id

    def run(self) -> None:  # type: ignore[override]
        """Render the preview and notify listeners when done."""

        try:
            result = self._pipeline.apply(
                self._buffer,
                self._rotation_radians,
                self._params,
                self._filter_id,
            )
        except Exception:
            _LOGGER.exception("Preview job %d failed", self._job_id)
            result = None
        if result is None:
            _LOGGER.debug("Preview job %d produced no image", self._job_id)
        self.signals.finished.emit(result, self._job_id)


__all__ = ["PreviewRenderSignals", "PreviewRenderWorker"]
