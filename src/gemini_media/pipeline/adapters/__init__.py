"""Provider adapters for generation and uploads."""

from .base import GenerationAdapter, UploadsCapability
from .gemini import GoogleGenAIAdapter, decode_response
from .mock import MockAdapter

__all__ = [
    "GenerationAdapter",
    "GoogleGenAIAdapter",
    "MockAdapter",
    "UploadsCapability",
    "decode_response",
]
