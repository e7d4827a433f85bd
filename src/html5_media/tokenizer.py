"""Inline rule that turns markdown image syntax into image, audio or video tokens.

This is a fork of markdown-it's own ``image`` rule. Links such as
``![alt](url "title")`` and reference forms ``![alt][ref]``, ``![alt][]``
and ``![alt]`` are parsed exactly like images, then the resolved URL is
classified by extension to decide the token type.
"""

from collections.abc import Callable, MutableMapping

from markdown_it.common.utils import isStrSpace, normalizeReference
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from .media_types import MediaType, guess_media_type

# Parses a label into child tokens: (src, md, env, out_tokens) -> None
InlineParser = Callable[[str, object, MutableMapping, list[Token]], None]


def _default_parse_inline(src: str, md, env: MutableMapping, tokens: list[Token]) -> None:
    md.inline.parse(src, md, env, tokens)


def _skip_spaces(src: str, pos: int, maximum: int) -> int:
    """Skip spaces, tabs and newlines between link parts."""
    while pos < maximum:
        ch = src[pos]
        if not isStrSpace(ch) and ch != "\n":
            break
        pos += 1
    return pos


def tokenize_media(
    state: StateInline,
    silent: bool,
    parse_inline: InlineParser | None = None,
) -> bool:
    """Try to parse an image or media reference at the current position.

    On success ``state.pos`` is moved past the reference and, unless
    ``silent``, one token of type image, audio or video is pushed. On failure
    ``state.pos`` is left untouched and nothing is pushed.

    Args:
        state: markdown-it inline parser state
        silent: Only check whether a reference starts here
        parse_inline: Collaborator used to parse the label into child tokens

    Returns:
        True if a reference was matched
    """
    label = None
    title = ""
    href = ""
    old_pos = state.pos
    maximum = state.posMax
    src = state.src

    if src[state.pos] != "!":
        return False
    if state.pos + 1 >= maximum or src[state.pos + 1] != "[":
        return False

    label_start = state.pos + 2
    label_end = state.md.helpers.parseLinkLabel(state, state.pos + 1, False)

    # No closing ']'
    if label_end < 0:
        return False

    pos = label_end + 1
    if pos < maximum and src[pos] == "(":
        # Inline form: ![label](  <href>  "title"  )
        pos = _skip_spaces(src, pos + 1, maximum)
        if pos >= maximum:
            return False

        res = state.md.helpers.parseLinkDestination(src, pos, state.posMax)
        if res.ok:
            href = state.md.normalizeLink(res.str)
            if state.md.validateLink(href):
                pos = res.pos
            else:
                href = ""

        start = pos
        pos = _skip_spaces(src, pos, maximum)

        # A title must be separated from the destination by whitespace
        res = state.md.helpers.parseLinkTitle(src, pos, state.posMax)
        if pos < maximum and start != pos and res.ok:
            title = res.str
            pos = _skip_spaces(src, res.pos, maximum)

        if pos >= maximum or src[pos] != ")":
            state.pos = old_pos
            return False
        pos += 1

    else:
        # Reference form: ![label][ref], ![label][] or ![label]
        if "references" not in state.env:
            return False

        if pos < maximum and src[pos] == "[":
            start = pos + 1
            pos = state.md.helpers.parseLinkLabel(state, pos)
            if pos >= 0:
                label = src[start:pos]
                pos += 1
            else:
                pos = label_end + 1
        else:
            pos = label_end + 1

        # Collapsed ('') and shortcut (None) references use the first label
        if not label:
            label = src[label_start:label_end]

        label = normalizeReference(label)

        ref = state.env["references"].get(label)
        if not ref:
            state.pos = old_pos
            return False

        href = ref["href"]
        title = ref["title"]

    if not silent:
        content = src[label_start:label_end]

        tokens: list[Token] = []
        (parse_inline or _default_parse_inline)(content, state.md, state.env, tokens)

        media_type = guess_media_type(href)

        token = state.push(media_type.value, media_type.tag, 0)
        token.attrs = {"src": href}
        if media_type is MediaType.IMAGE:
            token.attrs["alt"] = ""
        if title:
            token.attrs["title"] = title
        token.children = tokens
        token.content = content

        if label and state.md.options.get("store_labels", False):
            token.meta["label"] = label

    state.pos = pos
    state.posMax = maximum
    return True


def make_media_rule(parse_inline: InlineParser | None = None):
    """Wrap tokenize_media as a rule function for ``md.inline.ruler``."""

    def media_rule(state: StateInline, silent: bool) -> bool:
        return tokenize_media(state, silent, parse_inline)

    return media_rule
