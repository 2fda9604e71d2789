"""Tests for the caption stage."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from episodeflow.i18n import DefaultLocalizer
from episodeflow.stages.captions import (
    caption_format,
    caption_label,
    extract_captions,
    parse_caption_tags,
    read_caption,
    read_captions,
)


def _candidate(flavor: str, url: str = "https://example.org/captions.vtt", **extra: Any) -> dict[str, Any]:
    return {"id": "c1", "type": flavor, "url": url, **extra}


@pytest.fixture
def localizer() -> DefaultLocalizer:
    return DefaultLocalizer()


class TestParseCaptionTags:
    """Tests for parse_caption_tags function."""

    def test_all_hints(self) -> None:
        tags = parse_caption_tags(["archive", "lang:de", "generator-type:auto", "type:closed-caption"])

        assert tags.lang == "de"
        assert tags.auto_generated is True
        assert tags.closed_caption is True

    def test_other_values_ignored(self) -> None:
        tags = parse_caption_tags(["generator-type:manual", "type:subtitle"])

        assert tags.lang is None
        assert tags.auto_generated is False
        assert tags.closed_caption is False

    def test_non_string_tags_ignored(self) -> None:
        assert parse_caption_tags([None, 3]).lang is None


class TestCaptionFormat:
    """Tests for caption_format function."""

    def test_extension_is_format(self) -> None:
        assert caption_format("https://example.org/c.vtt", "vtt") == "vtt"

    def test_legacy_dfxp_xml(self) -> None:
        """Legacy 'captions/dfxp' XML files are DFXP."""
        assert caption_format("https://example.org/c.xml", "dfxp") == "dfxp"

    def test_xml_with_other_subtype(self) -> None:
        assert caption_format("https://example.org/c.xml", "ttml") == "xml"


class TestCaptionLabel:
    """Tests for caption_label function."""

    def test_language_name(self, localizer: DefaultLocalizer) -> None:
        assert caption_label("en", localizer) == "English"

    def test_markers(self, localizer: DefaultLocalizer) -> None:
        label = caption_label("en", localizer, closed_caption=True, auto_generated=True)
        assert label == "[CC] English (automatically generated)"

    def test_no_language(self, localizer: DefaultLocalizer) -> None:
        assert caption_label(None, localizer) == "Undefined caption"

    def test_unknown_language(self, localizer: DefaultLocalizer) -> None:
        assert caption_label("xx", localizer) == "Unknown language"

    def test_uses_injected_localizer(self) -> None:
        localizer = MagicMock()
        localizer.translate.side_effect = lambda key: {"automatically generated": "automatisch erzeugt"}[key]
        localizer.language_name.return_value = "Deutsch"

        label = caption_label("de", localizer, auto_generated=True)

        assert label == "Deutsch (automatisch erzeugt)"
        localizer.language_name.assert_called_once_with("de")


class TestReadCaption:
    """Tests for read_caption function."""

    def test_flavor_language(self, localizer: DefaultLocalizer) -> None:
        """'captions/vtt+en' without tags yields an English VTT caption."""
        result = read_caption(_candidate("captions/vtt+en"), localizer)

        assert result is not None and result.ok
        caption = result.caption
        assert caption.lang == "en"
        assert caption.format == "vtt"
        assert caption.text == "English"
        assert caption.id == "c1"
        assert caption.url == "https://example.org/captions.vtt"

    def test_legacy_dfxp(self, localizer: DefaultLocalizer) -> None:
        result = read_caption(_candidate("captions/dfxp", url="https://example.org/c.xml"), localizer)

        assert result is not None and result.ok
        assert result.caption.format == "dfxp"
        assert result.caption.lang is None
        assert result.caption.text == "Undefined caption"

    def test_tag_overrides_flavor_language(self, localizer: DefaultLocalizer) -> None:
        candidate = _candidate("captions/vtt+en", tags={"tag": "lang:fr"})

        result = read_caption(candidate, localizer)

        assert result.caption.lang == "fr"
        assert result.caption.text == "French"

    def test_tags_as_list(self, localizer: DefaultLocalizer) -> None:
        candidate = _candidate(
            "captions/vtt",
            tags={"tag": ["lang:es", "generator-type:auto", "type:closed-caption"]},
        )

        result = read_caption(candidate, localizer)

        assert result.caption.text == "[CC] Spanish (automatically generated)"

    def test_non_caption_flavor(self, localizer: DefaultLocalizer) -> None:
        assert read_caption(_candidate("presenter/delivery"), localizer) is None

    def test_missing_url_is_failure(self, localizer: DefaultLocalizer) -> None:
        candidate = _candidate("captions/vtt+en")
        del candidate["url"]

        result = read_caption(candidate, localizer)

        assert result is not None
        assert not result.ok
        assert result.error == "missing url"


class TestReadCaptions:
    """Tests for read_captions function."""

    def test_failure_does_not_abort_batch(self, localizer: DefaultLocalizer) -> None:
        candidates = [
            _candidate("captions/vtt+en", url=None),
            "garbage",
            _candidate("captions/vtt+de", url="https://example.org/de.vtt"),
        ]

        captions = read_captions(candidates, localizer)

        assert [c.lang for c in captions] == ["de"]


class TestExtractCaptions:
    """Tests for extract_captions function."""

    def test_attachments_then_tracks(self, episode: dict) -> None:
        episode["mediapackage"]["media"]["track"].append(
            {"id": "t9", "type": "captions/vtt+de", "url": "https://example.org/de.vtt", "mimetype": "text/vtt"}
        )

        captions = extract_captions(episode)

        assert [c.lang for c in captions] == ["en", "de"]

    def test_single_attachment_object(self, episode: dict) -> None:
        episode["mediapackage"]["attachments"]["attachment"] = _candidate("captions/vtt+en")
        assert len(extract_captions(episode)) == 1

    def test_no_attachments_or_tracks(self, episode: dict) -> None:
        del episode["mediapackage"]["attachments"]
        del episode["mediapackage"]["media"]
        assert extract_captions(episode) == []
