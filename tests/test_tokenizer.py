"""Tests for the media inline rule."""

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline

from html5_media import html5_media_plugin
from html5_media.tokenizer import make_media_rule, tokenize_media


def make_md(**options):
    """Create a MarkdownIt instance with the plugin installed."""
    return MarkdownIt().use(html5_media_plugin, **options)


def first_inline_token(text, md=None):
    """Parse text and return the first inline child token."""
    md = md or make_md()
    # Result is wrapped in a paragraph
    return md.parse(text)[1].children[0]


class TestInlineForm:
    """Tests for ![label](url "title") references."""

    def test_image_with_title(self):
        """A .jpg URL gives an image token with src, alt and title."""
        token = first_inline_token('![alt text](image.jpg "title text")')
        assert token.type == "image"
        assert token.tag == "img"
        assert list(token.attrs.items()) == [
            ("src", "image.jpg"),
            ("alt", ""),
            ("title", "title text"),
        ]
        assert token.content == "alt text"

    def test_unknown_extension_is_image(self):
        """An unrecognized extension stays an image without title."""
        token = first_inline_token("![alt text](image.unknown)")
        assert token.type == "image"
        assert token.attrs == {"src": "image.unknown", "alt": ""}
        assert token.content == "alt text"

    def test_audio_with_title(self):
        """A .mp3 URL gives an audio token."""
        token = first_inline_token('![descriptive text](audio.mp3 "title text")')
        assert token.type == "audio"
        assert token.tag == "audio"
        assert list(token.attrs.items()) == [
            ("src", "audio.mp3"),
            ("title", "title text"),
        ]
        assert token.content == "descriptive text"

    def test_video_without_title(self):
        """A .mp4 URL gives a video token with no alt or title."""
        token = first_inline_token("![descriptive text](video.mp4)")
        assert token.type == "video"
        assert token.tag == "video"
        assert token.attrs == {"src": "video.mp4"}
        assert token.content == "descriptive text"

    def test_angle_bracket_destination(self):
        """Destinations in <...> may contain spaces."""
        token = first_inline_token("![clip](<my clip.webm>)")
        assert token.type == "video"
        assert token.attrs["src"] == "my%20clip.webm"

    def test_whitespace_and_newline_around_parts(self):
        """Spaces and a newline around destination and title are skipped."""
        token = first_inline_token("![song](  song.ogg\n  'Title'  )")
        assert token.type == "audio"
        assert token.attrs["src"] == "song.ogg"
        assert token.attrs["title"] == "Title"

    def test_parenthesized_title(self):
        """Titles may be wrapped in parentheses."""
        token = first_inline_token("![song](song.wav (Title))")
        assert token.attrs["title"] == "Title"

    def test_title_needs_whitespace(self):
        """A quote directly after the destination is part of the URL."""
        token = first_inline_token('![x](clip.mp4"title")')
        assert "title" not in token.attrs
        assert token.type == "image"

    def test_empty_destination(self):
        """![label]() is an image with an empty src."""
        token = first_inline_token("![nothing]()")
        assert token.type == "image"
        assert token.attrs["src"] == ""

    def test_label_children_parsed(self):
        """Label text is parsed for nested inline formatting."""
        token = first_inline_token("![an *emphasized* clip](clip.mp4)")
        assert token.content == "an *emphasized* clip"
        assert [child.type for child in token.children] == [
            "text",
            "em_open",
            "text",
            "em_close",
            "text",
        ]

    def test_nested_brackets_in_label(self):
        """Balanced brackets inside the label are allowed."""
        token = first_inline_token("![a [nested] label](clip.mp4)")
        assert token.type == "video"
        assert token.content == "a [nested] label"

    def test_disallowed_scheme_rejected(self):
        """Destinations failing link validation are not media."""
        md = make_md()
        html = md.render("![x](javascript:alert(1).mp4)")
        assert "<video" not in html
        assert "<img" not in html

    def test_unclosed_parenthesis_is_text(self):
        """A missing ')' leaves the text alone."""
        html = make_md().render("![clip](clip.mp4")
        assert html == "<p>![clip](clip.mp4</p>\n"

    def test_unclosed_label_is_text(self):
        """A missing ']' leaves the text alone."""
        html = make_md().render("![clip(clip.mp4)")
        assert html == "<p>![clip(clip.mp4)</p>\n"


class TestReferenceForm:
    """Tests for reference-style media references."""

    def test_full_reference(self):
        """![label][ref] uses the ref definition."""
        token = first_inline_token('![desc][clip]\n\n[clip]: clip.webm "Clip"')
        assert token.type == "video"
        assert token.attrs == {"src": "clip.webm", "title": "Clip"}
        assert token.content == "desc"

    def test_collapsed_reference(self):
        """![label][] looks up the label itself."""
        token = first_inline_token("![Birdsong][]\n\n[birdsong]: birds.oga")
        assert token.type == "audio"
        assert token.attrs == {"src": "birds.oga"}
        assert token.content == "Birdsong"

    def test_shortcut_reference(self):
        """![label] looks up the label itself."""
        token = first_inline_token("![Birdsong]\n\n[birdsong]: birds.aac")
        assert token.type == "audio"
        assert token.content == "Birdsong"

    def test_reference_label_normalized(self):
        """Labels are matched case-insensitively with collapsed whitespace."""
        token = first_inline_token("![x][My   Clip]\n\n[my clip]: clip.m4v")
        assert token.type == "video"

    def test_reference_image(self):
        """Image references are still images."""
        token = first_inline_token("![photo][p]\n\n[p]: photo.png")
        assert token.type == "image"
        assert token.attrs == {"src": "photo.png", "alt": ""}

    def test_unresolved_reference_is_text(self):
        """An unknown reference is not a media token."""
        html = make_md().render("![x][nope]\n\n[other]: other.mp4")
        assert "<video" not in html
        assert "![x][nope]" in html

    def test_no_references_is_text(self):
        """Reference syntax without any definitions stays text."""
        html = make_md().render("![x][clip]")
        assert html == "<p>![x][clip]</p>\n"

    def test_store_labels(self):
        """The used label is kept in meta when store_labels is on."""
        md = MarkdownIt("commonmark", {"store_labels": True}).use(html5_media_plugin)
        token = first_inline_token("![x][Clip]\n\n[clip]: clip.mp4", md)
        assert token.meta["label"] == "CLIP"


class TestTokenizeMedia:
    """Tests for tokenize_media() called on a parser state."""

    def test_not_an_image(self):
        """Text not starting with ![ is rejected."""
        md = make_md()
        tokens = []
        state = StateInline("[link](clip.mp4)", md, {}, tokens)
        assert tokenize_media(state, False) is False
        assert state.pos == 0
        assert tokens == []

    def test_failure_restores_position(self):
        """A failed match leaves position and tokens untouched."""
        md = make_md()
        tokens = []
        state = StateInline('![clip](clip.mp4 "title"', md, {}, tokens)
        assert tokenize_media(state, False) is False
        assert state.pos == 0
        assert tokens == []

    def test_unresolved_reference_restores_position(self):
        """A missing reference restores the position."""
        md = make_md()
        tokens = []
        env = {"references": {}}
        state = StateInline("![clip][missing]", md, env, tokens)
        assert tokenize_media(state, False) is False
        assert state.pos == 0
        assert tokens == []

    def test_silent_mode_emits_nothing(self):
        """Silent mode matches without pushing a token."""
        md = make_md()
        tokens = []
        src = '![clip](clip.mp4 "title")'
        state = StateInline(src, md, {}, tokens)
        assert tokenize_media(state, True) is True
        assert tokens == []
        assert state.pos == len(src)

    def test_silent_mode_reference_emits_nothing(self):
        """Silent mode on a resolved reference pushes no token."""
        md = make_md()
        tokens = []
        env = {"references": {"CLIP": {"href": "clip.mp4", "title": ""}}}
        state = StateInline("![clip] x", md, env, tokens)
        assert tokenize_media(state, True) is True
        assert tokens == []
        assert state.pos == len("![clip]")

    def test_success_advances_position(self):
        """A match moves past the reference and pushes one token."""
        md = make_md()
        tokens = []
        src = "![clip](clip.mp4) and more"
        state = StateInline(src, md, {}, tokens)
        assert tokenize_media(state, False) is True
        assert state.pos == len("![clip](clip.mp4)")
        assert len(tokens) == 1
        assert tokens[0].type == "video"

    def test_reference_from_env(self):
        """References are read from the env mapping."""
        md = make_md()
        tokens = []
        env = {"references": {"CLIP": {"href": "talk.mp3", "title": "Talk"}}}
        state = StateInline("![clip]", md, env, tokens)
        assert tokenize_media(state, False) is True
        assert tokens[0].type == "audio"
        assert tokens[0].attrs == {"src": "talk.mp3", "title": "Talk"}


class TestInjectedInlineParser:
    """Tests for replacing the parser of label content."""

    def test_stub_parser_receives_label(self):
        """The injected parser gets the raw label text."""
        calls = []

        def stub(src, md, env, tokens):
            calls.append(src)

        md = make_md(parse_inline=stub)
        token = first_inline_token("![*clip*](clip.mp4)", md)
        assert calls == ["*clip*"]
        assert token.children == []
        assert token.content == "*clip*"

    def test_make_media_rule(self):
        """make_media_rule wraps tokenize_media for the ruler."""
        md = make_md()
        rule = make_media_rule()
        tokens = []
        state = StateInline("![song](song.mp3)", md, {}, tokens)
        assert rule(state, False) is True
        assert tokens[0].type == "audio"
