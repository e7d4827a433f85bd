"""markdown-it-py plugin: render video and audio references as HTML5 media.

Usage::

    from markdown_it import MarkdownIt
    from html5_media import html5_media_plugin

    md = MarkdownIt().use(html5_media_plugin, videoAttrs='controls')
    md.render("![A cat](cat.mp4)", {"language": "en"})
"""

from markdown_it import MarkdownIt

from .config import MediaConfig
from .renderer import MEDIA_TYPES, make_render_rule
from .tokenizer import InlineParser, make_media_rule


def html5_media_plugin(
    md: MarkdownIt,
    config: MediaConfig | None = None,
    parse_inline: InlineParser | None = None,
    **options,
) -> None:
    """Install the media tokenizer and renderer on a MarkdownIt instance.

    The built-in ``image`` inline rule is replaced, so image links keep
    working and only audio or video URLs change their output.

    Args:
        md: MarkdownIt instance, passed by ``md.use``
        config: Ready-made configuration; ``options`` are ignored if given
        parse_inline: Replacement for the parser of nested label content
        **options: ``videoAttrs``, ``audioAttrs``, ``messages``,
            ``translateFn`` (or their snake_case forms) and ``language``
    """
    from .logging import debug

    if config is None:
        config = MediaConfig.from_options(options)

    md.inline.ruler.at("image", make_media_rule(parse_inline))

    render_rule = make_render_rule(config)
    for media_type in MEDIA_TYPES:
        md.add_render_rule(media_type, render_rule)

    debug(
        f"Installed html5 media rules "
        f"(video: {config.video_attrs!r}, audio: {config.audio_attrs!r})"
    )
