"""Request orchestration and upload pipeline."""

from .classifier import classify, is_terminal
from .poller import UploadPoller
from .progress import CallbackObserver, ProgressEvent, ProgressObserver, ProgressTracker
from .retry import RetryPolicy
from .supervisor import NullObserver, RequestSupervisor, SupervisorObserver
from .upload import (
    InlineUploadPipeline,
    RemoteUploadPipeline,
    UploadPipeline,
    create_upload_pipeline,
    read_media,
)

__all__ = [
    "CallbackObserver",
    "InlineUploadPipeline",
    "NullObserver",
    "ProgressEvent",
    "ProgressObserver",
    "ProgressTracker",
    "RemoteUploadPipeline",
    "RequestSupervisor",
    "RetryPolicy",
    "SupervisorObserver",
    "UploadPipeline",
    "UploadPoller",
    "classify",
    "create_upload_pipeline",
    "is_terminal",
    "read_media",
]
