"""Render audio and video tokens as HTML5 elements with fallback text."""

from collections.abc import Callable, MutableMapping, Sequence

from markdown_it.common.utils import escapeHtml
from markdown_it.token import Token

from .config import MediaConfig
from .i18n import DESCRIPTION, FALLBACK_LINK, not_supported_key

MEDIA_TYPES = ("audio", "video")


def build_media_html(
    media_type: str,
    src: str,
    title: str | None,
    content: str,
    config: MediaConfig,
    language: str | None = None,
    escape: Callable[[str], str] = escapeHtml,
) -> str:
    """Build a <video> or <audio> element.

    The fallback body is the "cannot play" sentence, the download link for
    ``src`` and, if there is any ``content``, a description of the media.

    Args:
        media_type: "audio" or "video"
        src: Media URL, used verbatim
        title: Optional title attribute, escaped
        content: Label text describing the media, escaped
        config: Attributes and messages of this registration
        language: Language of the fallback text
        escape: HTML escaping function

    Returns:
        The element markup
    """
    attrs = config.attrs_for(media_type)
    if attrs:
        attrs = " " + attrs

    title_attr = f' title="{escape(title)}"' if title is not None else ""

    fallback_text = (
        config.translate(language, not_supported_key(media_type))
        + "\n"
        + config.translate(language, FALLBACK_LINK, [src])
    )
    description = (
        "\n" + config.translate(language, DESCRIPTION, [escape(content)])
        if content
        else ""
    )

    return (
        f'<{media_type} src="{src}"{title_attr}{attrs}>\n'
        f"{fallback_text}{description}\n"
        f"</{media_type}>"
    )


def render_media(
    tokens: Sequence[Token],
    idx: int,
    options,
    env: MutableMapping,
    config: MediaConfig,
) -> str:
    """Render the audio or video token at ``tokens[idx]``.

    Any other token type renders as an empty string.
    """
    token = tokens[idx]
    if token.type not in MEDIA_TYPES:
        return ""

    language = env.get("language") or config.language

    return build_media_html(
        token.type,
        str(token.attrGet("src")),
        token.attrGet("title"),
        token.content,
        config,
        language,
    )


def make_render_rule(config: MediaConfig):
    """Create a markdown-it render rule bound to one registration's config."""

    def render_media_rule(self, tokens, idx, options, env):
        return render_media(tokens, idx, options, env, config)

    return render_media_rule
