"""Background workers for preview rendering."""

from .preview_render_worker import PreviewRenderSignals, PreviewRenderWorker
from .preview_scheduler import PreviewScheduler

__all__ = [
    "PreviewRenderSignals",
    "PreviewRenderWorker",
    "PreviewScheduler",
]
