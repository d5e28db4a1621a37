"""Media analysis with Gemini: upload a file, request time-coded annotations."""

import importlib.metadata
import logging

from gemini_media.config import FrozenConfig, ResolvedConfig, resolve_config
from gemini_media.core.exceptions import (
    APIError,
    ConfigurationError,
    GeminiMediaError,
    UnsupportedMediaError,
    UploadError,
    UploadErrorKind,
    UploadProcessingError,
    UploadReadError,
    UploadTimeoutError,
    ValidationError,
)
from gemini_media.core.types import (
    Abandoned,
    AnalysisRequest,
    Failed,
    Failure,
    FileState,
    FunctionResult,
    GenerationOutcome,
    Inconclusive,
    RecitationBlocked,
    Result,
    SafetyBlocked,
    Success,
    TextResult,
    UploadedFile,
)
from gemini_media.pipeline import (
    InlineUploadPipeline,
    RemoteUploadPipeline,
    RequestSupervisor,
    RetryPolicy,
    UploadPoller,
)
from gemini_media.prompts import PromptResolver, StaticPromptResolver
from gemini_media.session import AnalysisSession, create_session
from gemini_media.telemetry import TelemetryContext, TelemetryReporter

try:
    __version__ = importlib.metadata.version("gemini-media")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Libraries should not configure logging for the host application.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Session
    "AnalysisSession",
    "create_session",
    "PromptResolver",
    "StaticPromptResolver",
    # Orchestration
    "RequestSupervisor",
    "RetryPolicy",
    "RemoteUploadPipeline",
    "InlineUploadPipeline",
    "UploadPoller",
    # Types
    "AnalysisRequest",
    "UploadedFile",
    "FileState",
    "GenerationOutcome",
    "FunctionResult",
    "TextResult",
    "SafetyBlocked",
    "RecitationBlocked",
    "Inconclusive",
    "Failed",
    "Abandoned",
    "Result",
    "Success",
    "Failure",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Telemetry
    "TelemetryContext",
    "TelemetryReporter",
    # Exceptions
    "GeminiMediaError",
    "ConfigurationError",
    "ValidationError",
    "APIError",
    "UploadError",
    "UploadErrorKind",
    "UploadTimeoutError",
    "UploadProcessingError",
    "UploadReadError",
    "UnsupportedMediaError",
]
