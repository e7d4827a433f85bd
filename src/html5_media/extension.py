#!/usr/bin/env python3
"""
Markdown extension that renders video and audio references as HTML5 media.
Converts ![description](clip.mp4 "title") to <video src="clip.mp4" ...>
"""

import re
import xml.etree.ElementTree as etree

from markdown import Extension, util
from markdown.inlinepatterns import (
    IMAGE_LINK_RE,
    IMAGE_REFERENCE_RE,
    ImageInlineProcessor,
    ImageReferenceInlineProcessor,
    ShortImageReferenceInlineProcessor,
)
from markdown_it.common.utils import escapeHtml

from .config import DEFAULT_AUDIO_ATTRS, DEFAULT_VIDEO_ATTRS, MediaConfig
from .media_types import MediaType, guess_media_type
from .renderer import build_media_html

# Backslash escapes left as placeholders by the escape inline processor
_ESCAPED_CHAR_RE = re.compile(f"{util.STX}(\\d+){util.ETX}")


def _unescape_chars(text: str) -> str:
    return _ESCAPED_CHAR_RE.sub(lambda m: chr(int(m.group(1))), text)


class MediaTagMixin:
    """Shared markup builder for the media inline processors."""

    def __init__(self, pattern, md, media_config: MediaConfig):
        super().__init__(pattern, md)
        self.media_config = media_config

    def makeMediaTag(self, media_type: MediaType, src, title, text) -> str:
        """Render a <video>/<audio> element and stash it as raw HTML."""
        html = build_media_html(
            media_type.value,
            escapeHtml(_unescape_chars(src)),
            _unescape_chars(title) if title else None,
            _unescape_chars(self.unescape(text)),
            self.media_config,
            self.media_config.language,
        )
        return self.md.htmlStash.store(html)

    def makeTag(self, href, title, text):
        media_type = guess_media_type(_unescape_chars(href))
        if media_type is MediaType.IMAGE:
            return super().makeTag(href, title, text)
        return self.makeMediaTag(media_type, href, title, text)


class MediaInlineProcessor(MediaTagMixin, ImageInlineProcessor):
    """Inline form: ![description](url "title")."""

    def handleMatch(self, m, data):
        text, index, handled = self.getText(data, m.end(0))
        if not handled:
            return None, None, None

        src, title, index, handled = self.getLink(data, index)
        if not handled:
            return None, None, None

        media_type = guess_media_type(_unescape_chars(src))
        if media_type is MediaType.IMAGE:
            return self.makeImageTag(src, title, text), m.start(0), index

        return self.makeMediaTag(media_type, src, title, text), m.start(0), index

    def makeImageTag(self, src, title, text):
        """Build the same <img> element as ImageInlineProcessor."""
        el = etree.Element("img")
        el.set("src", src)
        if title is not None:
            el.set("title", title)
        el.set("alt", self.unescape(text))
        return el


class MediaReferenceInlineProcessor(MediaTagMixin, ImageReferenceInlineProcessor):
    """Reference forms: ![description][ref] and ![description][]."""


class ShortMediaReferenceInlineProcessor(
    MediaTagMixin, ShortImageReferenceInlineProcessor
):
    """Shortcut reference form: ![description]."""


class Html5MediaExtension(Extension):
    """Markdown extension for HTML5 video and audio references."""

    def __init__(self, **kwargs):
        self.config = {
            "video_attrs": [DEFAULT_VIDEO_ATTRS, "Attributes added to <video> tags"],
            "audio_attrs": [DEFAULT_AUDIO_ATTRS, "Attributes added to <audio> tags"],
            "language": ["", "Language of the fallback text (default: English)"],
            "messages": [{}, "Message table replacing the built-in one"],
            "translate_fn": ["", "Function replacing the built-in translation"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        """Replace the image inline processors with media-aware ones."""
        from .logging import debug

        configs = self.getConfigs()
        media_config = MediaConfig.from_options(
            {
                "video_attrs": configs["video_attrs"],
                "audio_attrs": configs["audio_attrs"],
                "language": configs["language"] or None,
                "messages": configs["messages"] or None,
                "translate_fn": configs["translate_fn"] or None,
            },
            section="extension",
        )

        # Same names and priorities as the processors being replaced
        md.inlinePatterns.register(
            MediaInlineProcessor(IMAGE_LINK_RE, md, media_config), "image_link", 150
        )
        md.inlinePatterns.register(
            MediaReferenceInlineProcessor(IMAGE_REFERENCE_RE, md, media_config),
            "image_reference",
            140,
        )
        md.inlinePatterns.register(
            ShortMediaReferenceInlineProcessor(IMAGE_REFERENCE_RE, md, media_config),
            "short_image_ref",
            125,
        )
        debug("Registered html5 media inline processors")


def makeExtension(**kwargs):
    """Entry point for markdown extension."""
    return Html5MediaExtension(**kwargs)
