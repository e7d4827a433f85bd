"""Render video and audio references in markdown image syntax as HTML5 media."""

from .config import MediaConfig
from .media_types import AUDIO_EXTENSIONS, VIDEO_EXTENSIONS, MediaType, guess_media_type
from .i18n import messages, translate
from .plugin import html5_media_plugin

__all__ = [
    "AUDIO_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    "MediaConfig",
    "MediaType",
    "guess_media_type",
    "html5_media_plugin",
    "messages",
    "translate",
]
