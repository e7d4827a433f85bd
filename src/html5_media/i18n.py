"""Fallback text shown inside <video> and <audio> elements.

Messages are grouped by language code (typically ISO 639) and identified by
a short descriptive key. Templates use a plain ``%s`` placeholder.
"""

from collections.abc import Callable, Mapping, Sequence

DEFAULT_LANGUAGE = "en"

VIDEO_NOT_SUPPORTED = "html5 video not supported"
AUDIO_NOT_SUPPORTED = "html5 audio not supported"
FALLBACK_LINK = "html5 media fallback link"
DESCRIPTION = "html5 media description"

# Mutable on purpose: callers may edit single messages in place before
# registering the plugin.
messages: dict[str, dict[str, str]] = {
    "en": {
        VIDEO_NOT_SUPPORTED: "Your browser does not support playing HTML5 video.",
        AUDIO_NOT_SUPPORTED: "Your browser does not support playing HTML5 audio.",
        FALLBACK_LINK: 'You can <a href="%s" download>download the file</a> instead.',
        DESCRIPTION: "Here is a description of the content: %s",
    }
}

TranslateFn = Callable[[str | None, str, Sequence[str] | None], str]


def not_supported_key(media_type: str) -> str:
    """Message key for the "cannot play" sentence of a media type."""
    return f"html5 {media_type} not supported"


def format_message(template: str, params: Sequence[str] | None = None) -> str:
    """Substitute params into a template, one ``%s`` at a time.

    Each param replaces the first ``%s`` left in the already substituted
    string, so a param that itself contains ``%s`` is picked up by the next
    replacement.
    """
    message = template
    for param in params or ():
        message = message.replace("%s", str(param), 1)
    return message


def translate(
    language: str | None,
    message_key: str,
    message_params: Sequence[str] | None = None,
    table: Mapping[str, Mapping[str, str]] | None = None,
) -> str:
    """Look up and format a message.

    Falls back to English when the language is unknown or lacks the key,
    and to an empty string when there is no English table at all.

    Args:
        language: Language code, or None for the default
        message_key: Identifier of the message
        message_params: Strings substituted for ``%s`` placeholders
        table: Message table to read (default: the module-level ``messages``)

    Returns:
        The translated message
    """
    from .logging import debug

    if table is None:
        table = messages

    if language not in table or not table[language].get(message_key):
        if language not in (None, DEFAULT_LANGUAGE):
            debug(f"No '{language}' message for '{message_key}', using English")
        language = DEFAULT_LANGUAGE

    if language not in table:
        return ""

    template = table[language].get(message_key) or ""
    return format_message(template, message_params)
