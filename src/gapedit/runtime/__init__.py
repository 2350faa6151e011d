"""Process-level collaborators: configuration, telemetry, file storage."""

from .config import EditorConfig

__all__ = ["EditorConfig"]
