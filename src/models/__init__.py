# Data models for youtools
from .video import VideoMetadata, extract_video_id
from .generation import (
    BypassReason,
    ContentKind,
    GenerationMode,
    GenerationRequest,
    GenerationResult,
)

__all__ = [
    "VideoMetadata",
    "extract_video_id",
    # Generation pipeline
    "BypassReason",
    "ContentKind",
    "GenerationMode",
    "GenerationRequest",
    "GenerationResult",
]
