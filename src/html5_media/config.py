"""Configuration for the html5_media plugin and extension."""

import copy
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields
from pathlib import Path

from . import i18n
from .i18n import TranslateFn

DEFAULT_VIDEO_ATTRS = 'controls class="html5-video-player"'
DEFAULT_AUDIO_ATTRS = 'controls class="html5-audio-player"'

CONFIG_SECTION = "html5_media"

# Option names used by the original markdown-it plugin
OPTION_ALIASES = {
    "videoAttrs": "video_attrs",
    "audioAttrs": "audio_attrs",
    "translateFn": "translate_fn",
}


def _find_similar(key: str, valid_keys: set[str], threshold: float = 0.6) -> str | None:
    """Find a similar key from valid_keys using Levenshtein ratio.

    Args:
        key: The unknown key to match
        valid_keys: Set of valid key names
        threshold: Minimum similarity ratio (0-1) to suggest

    Returns:
        Most similar key if above threshold, None otherwise
    """

    def levenshtein_ratio(s1: str, s2: str) -> float:
        """Calculate similarity ratio between two strings."""
        m, n = len(s1), len(s2)
        if m == 0 or n == 0:
            return 0.0

        d = [[0] * (n + 1) for _ in range(m + 1)]
        for i in range(m + 1):
            d[i][0] = i
        for j in range(n + 1):
            d[0][j] = j

        for i in range(1, m + 1):
            for j in range(1, n + 1):
                cost = 0 if s1[i - 1] == s2[j - 1] else 1
                d[i][j] = min(d[i - 1][j] + 1, d[i][j - 1] + 1, d[i - 1][j - 1] + cost)

        return 1.0 - (d[m][n] / max(m, n))

    best_match = None
    best_ratio = 0.0

    for valid in sorted(valid_keys):
        ratio = levenshtein_ratio(key.lower(), valid.lower())
        if ratio > best_ratio:
            best_ratio = ratio
            best_match = valid

    return best_match if best_ratio >= threshold else None


def _warn_unknown_keys(
    data: Mapping, valid_keys: set[str], section: str, config_path: Path | None = None
) -> None:
    """Warn about unknown keys in a set of options.

    Args:
        data: Mapping of option names to values
        valid_keys: Set of valid option names
        section: Section name for warning messages
        config_path: Path to config file for warning messages
    """
    from .logging import warning

    unknown_keys = set(data.keys()) - valid_keys
    if not unknown_keys:
        return

    for key in sorted(unknown_keys):
        location = f" in {config_path}" if config_path else ""
        msg = f"Unknown config key '{key}' in [{section}]{location}"

        similar = _find_similar(key, valid_keys)
        if similar:
            msg += f". Did you mean '{similar}'?"

        warning(msg)


def _snapshot_messages() -> dict[str, dict[str, str]]:
    # Taken at construction time so later edits of the shared table don't leak
    return copy.deepcopy(i18n.messages)


@dataclass
class MediaConfig:
    """Settings captured by one registration of the plugin.

    Each registration owns its own instance, so two differently configured
    markdown processors never see each other's attributes or messages.
    """

    video_attrs: str = DEFAULT_VIDEO_ATTRS
    audio_attrs: str = DEFAULT_AUDIO_ATTRS
    messages: dict[str, dict[str, str]] = field(default_factory=_snapshot_messages)
    translate_fn: TranslateFn | None = None
    language: str | None = None

    @classmethod
    def from_options(
        cls, options: Mapping | None = None, section: str = "options"
    ) -> "MediaConfig":
        """Build a config from plugin options.

        Accepts both the camelCase names of the markdown-it plugin
        (``videoAttrs``, ``audioAttrs``, ``translateFn``) and their
        snake_case equivalents. Options set to None keep their default.

        Args:
            options: Mapping of option names to values
            section: Name used in warnings about unknown options

        Returns:
            New MediaConfig
        """
        options = options or {}
        data = {OPTION_ALIASES.get(key, key): value for key, value in options.items()}

        valid_keys = {f.name for f in fields(cls)}
        _warn_unknown_keys(data, valid_keys, section)

        kwargs = {
            name: value
            for name, value in data.items()
            if name in valid_keys and value is not None
        }
        return cls(**kwargs)

    @classmethod
    def load(cls, config_path: Path) -> "MediaConfig":
        """Load configuration from the [html5_media] table of a TOML file.

        Translations go in ``[html5_media.messages.<language>]`` tables.
        A missing file or missing table gives the defaults.

        Args:
            config_path: Path to the TOML file

        Returns:
            Loaded MediaConfig with defaults merged
        """
        if not config_path.exists():
            return cls()

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        section = data.get(CONFIG_SECTION, {})
        valid_keys = {f.name for f in fields(cls)} - {"translate_fn"}
        _warn_unknown_keys(section, valid_keys, CONFIG_SECTION, config_path)

        kwargs = {name: value for name, value in section.items() if name in valid_keys}
        if "messages" in kwargs:
            kwargs["messages"] = {
                language: dict(table) for language, table in kwargs["messages"].items()
            }
        return cls(**kwargs)

    def attrs_for(self, media_type: str) -> str:
        """Extra attributes for a <video> or <audio> tag, trimmed."""
        if media_type == "video":
            return self.video_attrs.strip()
        if media_type == "audio":
            return self.audio_attrs.strip()
        return ""

    def translate(
        self,
        language: str | None,
        message_key: str,
        message_params: Sequence[str] | None = None,
    ) -> str:
        """Translate a message with this config's function or table."""
        if self.translate_fn is not None:
            return self.translate_fn(language, message_key, message_params)
        return i18n.translate(
            language, message_key, message_params, table=self.messages
        )
