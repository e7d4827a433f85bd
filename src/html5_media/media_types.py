"""Guess the kind of media a URL points to from its file extension."""

import re
from enum import Enum

# MP1 and MP2 are left out (not in active use); ambiguous containers such as
# MPG and MP4 count as video.
AUDIO_EXTENSIONS = frozenset({"aac", "m4a", "mp3", "oga", "ogg", "wav"})
VIDEO_EXTENSIONS = frozenset({"mp4", "m4v", "ogv", "webm", "mpg", "mpeg"})

_EXTENSION_PATTERN = re.compile(r"\.([^/.]+)\Z")


class MediaType(str, Enum):
    """Token types produced by the media tokenizer."""

    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"

    @property
    def tag(self) -> str:
        """HTML element name used for this media type."""
        return "img" if self is MediaType.IMAGE else self.value


def guess_media_type(url: str) -> MediaType:
    """Classify a URL as image, audio or video.

    Only the final extension of the URL is looked at, case-insensitively.
    Anything without a recognized audio or video extension is an image.

    Args:
        url: Any URL or path

    Returns:
        The matching MediaType
    """
    match = _EXTENSION_PATTERN.search(url)
    if match is None:
        return MediaType.IMAGE

    extension = match.group(1).lower()
    if extension in AUDIO_EXTENSIONS:
        return MediaType.AUDIO
    if extension in VIDEO_EXTENSIONS:
        return MediaType.VIDEO
    return MediaType.IMAGE
