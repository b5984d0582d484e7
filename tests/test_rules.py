"""Tests for the bundled rules, run one at a time with their default config."""

import pytest

from appibilities.engine.models import RuleErrorKind
from appibilities.engine.runner import RuleRunner
from appibilities.rules import (
    DEFAULT_CONFIG,
    ArtboardsAllowedSizesRule,
    FontWeightsAllowedRule,
    IncludesEllipsisRule,
    InteractiveElementMinSizeRule,
    NewYorkOpticalSizeRule,
    SanFranciscoOpticalSizeRule,
    SymbolsMinSizeRule,
)
from appibilities.rules.formatting import format_number, parse_size
from tests.builders import artboard, document, hotspot, layer, symbol_instance, text


async def _run(rule, raw: dict, **overrides):
    configs = {rule.name: {**DEFAULT_CONFIG[rule.name], **overrides}}
    return await RuleRunner().run(raw, [rule], configs)


async def _messages(rule, raw: dict, **overrides) -> list[str]:
    result = await _run(rule, raw, **overrides)
    assert result.rule_errors == []
    return [v.message for v in result.violations]


class TestArtboardsAllowedSizes:
    """Tests for ArtboardsAllowedSizesRule."""

    @pytest.mark.asyncio
    async def test_exact_size_passes(self):
        raw = document(artboard(375, 812))
        assert await _messages(ArtboardsAllowedSizesRule(), raw, allow_exceeding_height=False) == []

    @pytest.mark.asyncio
    async def test_taller_artboard_with_exceeding_height(self):
        raw = document(artboard(375, 2000))
        assert await _messages(ArtboardsAllowedSizesRule(), raw) == []

    @pytest.mark.asyncio
    async def test_taller_artboard_without_exceeding_height(self):
        raw = document(artboard(375, 2000))
        messages = await _messages(ArtboardsAllowedSizesRule(), raw, allow_exceeding_height=False)
        assert messages == ["375×2000 is not an allowed size"]

    @pytest.mark.asyncio
    async def test_shorter_artboard_fails_either_way(self):
        raw = document(artboard(375, 600))
        assert len(await _messages(ArtboardsAllowedSizesRule(), raw)) == 1

    @pytest.mark.asyncio
    async def test_unknown_width(self):
        raw = document(artboard(376, 812))
        assert await _messages(ArtboardsAllowedSizesRule(), raw) == ["376×812 is not an allowed size"]

    @pytest.mark.asyncio
    async def test_exceeding_height_defaults_to_off(self):
        raw = document(artboard(375, 2000))
        configs = {"appibilities/artboards-allowed-sizes": {"sizes": ["375x812"]}}
        result = await RuleRunner().run(raw, [ArtboardsAllowedSizesRule()], configs)
        assert len(result.violations) == 1

    @pytest.mark.asyncio
    async def test_invalid_size_is_a_rule_error(self):
        result = await _run(ArtboardsAllowedSizesRule(), document(artboard(375, 812)), sizes=["big"])
        assert result.violations == []
        assert result.rule_errors[0].kind == RuleErrorKind.CHECK_EXECUTION_ERROR
        assert result.rule_errors[0].error == "Invalid size 'big'"

    @pytest.mark.asyncio
    async def test_empty_sizes_fail_validation(self):
        result = await _run(ArtboardsAllowedSizesRule(), document(artboard(375, 812)), sizes=[])
        assert result.rule_errors[0].kind == RuleErrorKind.OPTION_VALIDATION_FAILED


class TestSymbolsMinSize:
    """Tests for SymbolsMinSizeRule."""

    @pytest.mark.asyncio
    async def test_small_button_is_reported(self):
        raw = document(symbol_instance("Primary Button", 30, 30))
        assert await _messages(SymbolsMinSizeRule(), raw) == [
            "Symbol instance has a size of 30x30 (minimum should be 44×44)"
        ]

    @pytest.mark.asyncio
    async def test_large_enough_button_passes(self):
        raw = document(symbol_instance("Icon/Close", 44, 48))
        assert await _messages(SymbolsMinSizeRule(), raw) == []

    @pytest.mark.asyncio
    async def test_names_outside_pattern_are_ignored(self):
        raw = document(symbol_instance("Avatar", 30, 30))
        assert await _messages(SymbolsMinSizeRule(), raw) == []

    @pytest.mark.asyncio
    async def test_one_small_dimension_is_enough(self):
        raw = document(symbol_instance("Link", 100, 20))
        assert len(await _messages(SymbolsMinSizeRule(), raw)) == 1

    @pytest.mark.asyncio
    async def test_configured_min_size(self):
        raw = document(symbol_instance("CTA", 30, 30))
        assert await _messages(SymbolsMinSizeRule(), raw, min_size=30) == []


class TestInteractiveElementMinSize:
    """Tests for InteractiveElementMinSizeRule."""

    @pytest.mark.asyncio
    async def test_small_hotspot_is_reported(self):
        raw = document(hotspot(30, 30))
        assert await _messages(InteractiveElementMinSizeRule(), raw) == [
            "Interactive element has a size of 30×30 (minimum should be 44×44)"
        ]

    @pytest.mark.asyncio
    async def test_large_enough_hotspot_passes(self):
        result = await _run(InteractiveElementMinSizeRule(), document(hotspot(44, 44)))
        assert result.violations == []
        assert result.rule_errors == []

    @pytest.mark.asyncio
    async def test_nested_layer_with_flow(self):
        flow = {"destinationArtboardID": "a"}
        raw = document(artboard(375, 812, layer("rectangle", 20, 60, flow=flow)))
        assert len(await _messages(InteractiveElementMinSizeRule(), raw)) == 1

    @pytest.mark.asyncio
    async def test_layers_without_flow_are_ignored(self):
        raw = document(layer("rectangle", 5, 5))
        assert await _messages(InteractiveElementMinSizeRule(), raw) == []


class TestSanFranciscoOpticalSize:
    """Tests for SanFranciscoOpticalSizeRule."""

    @pytest.mark.asyncio
    async def test_display_cut_below_twenty_points(self):
        raw = document(text("Body", font_name="SFProDisplay-Regular", font_size=17))
        messages = await _messages(SanFranciscoOpticalSizeRule(), raw)
        assert messages == [
            "Text Layers using “San Francisco” should be set as \"Text\" at size 17 "
            "(or when smaller than 20 points). Currently using “SFProDisplay”"
        ]

    @pytest.mark.asyncio
    async def test_text_cut_at_twenty_points_and_above(self):
        raw = document(text("Title", font_name="SFProText-Bold", font_size=20))
        messages = await _messages(SanFranciscoOpticalSizeRule(), raw)
        assert len(messages) == 1
        assert "\"Display\" at size 20" in messages[0]

    @pytest.mark.asyncio
    async def test_correct_cuts_pass(self):
        raw = document(
            text("Body", font_name="SFProText-Regular", font_size=17),
            text("Title", font_name="SFProDisplay-Bold", font_size=34),
        )
        assert await _messages(SanFranciscoOpticalSizeRule(), raw) == []

    @pytest.mark.asyncio
    async def test_other_families_are_ignored(self):
        raw = document(text("Body", font_name="Helvetica-Bold", font_size=12), text("Plain"))
        assert await _messages(SanFranciscoOpticalSizeRule(), raw) == []

    @pytest.mark.asyncio
    async def test_pattern_is_required(self):
        raw = document(text("Body"))
        configs = {"ios-accessibility-assistant/sf-disallow": {"active": True}}
        result = await RuleRunner().run(raw, [SanFranciscoOpticalSizeRule()], configs)
        assert result.rule_errors[0].kind == RuleErrorKind.OPTION_MISSING


class TestNewYorkOpticalSize:
    """Tests for NewYorkOpticalSizeRule."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "font_name,font_size",
        [
            ("NewYorkSmall-Regular", 12),
            ("NewYorkMedium-Regular", 28),
            ("NewYorkLarge-Semibold", 40),
            ("NewYorkExtraLarge-Bold", 60),
        ],
    )
    async def test_matching_cuts_pass(self, font_name, font_size):
        raw = document(text("Serif", font_name=font_name, font_size=font_size))
        assert await _messages(NewYorkOpticalSizeRule(), raw) == []

    @pytest.mark.asyncio
    async def test_large_cut_at_small_size(self):
        raw = document(text("Serif", font_name="NewYorkLarge-Regular", font_size=12))
        assert await _messages(NewYorkOpticalSizeRule(), raw) == [
            "Text Layers using “New York” should be set as \"Small\" at size 12 "
            "(or when smaller than 20 points). Currently using “NewYorkLarge”"
        ]

    @pytest.mark.asyncio
    async def test_small_cut_at_medium_size(self):
        raw = document(text("Serif", font_name="NewYorkSmall-Bold", font_size=28))
        messages = await _messages(NewYorkOpticalSizeRule(), raw)
        assert len(messages) == 1
        assert "\"Medium\" at size 28 (or when between 20 and 35 points)" in messages[0]


class TestFontWeightsAllowed:
    """Tests for FontWeightsAllowedRule."""

    @pytest.mark.asyncio
    async def test_disallowed_weight(self):
        raw = document(text("Thin", font_name="SFProText-Light", font_size=17))
        assert await _messages(FontWeightsAllowedRule(), raw) == [
            "Text Layer is using “Light”. The only allowed weights are ”Regular, Medium, Semibold, Bold”"
        ]

    @pytest.mark.asyncio
    async def test_allowed_weight(self):
        raw = document(text("Body", font_name="SFProText-Semibold", font_size=17))
        assert await _messages(FontWeightsAllowedRule(), raw) == []

    @pytest.mark.asyncio
    async def test_font_without_weight(self):
        raw = document(text("Body", font_name="Helvetica", font_size=17), text("Unstyled"))
        messages = await _messages(FontWeightsAllowedRule(), raw)
        assert len(messages) == 2
        assert all(m.startswith("Text Layer is using “no weight”") for m in messages)

    @pytest.mark.asyncio
    async def test_configured_weights(self):
        raw = document(text("Thin", font_name="SFProText-Light", font_size=17))
        assert await _messages(FontWeightsAllowedRule(), raw, pattern=["Light"]) == []


class TestIncludesEllipsis:
    """Tests for IncludesEllipsisRule."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["Loading...", "Loading…", "Wait . . . done"])
    async def test_ellipsis_forms_are_reported(self, content):
        raw = document(text(content))
        assert len(await _messages(IncludesEllipsisRule(), raw)) == 1

    @pytest.mark.asyncio
    async def test_plain_text_passes(self):
        raw = document(text("Loading"), text("End."))
        assert await _messages(IncludesEllipsisRule(), raw) == []


class TestFormatting:
    """Tests for the shared formatting helpers."""

    def test_parse_size(self):
        assert parse_size("375x812") == (375, 812)
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size("375by812")

    def test_format_number(self):
        assert format_number(375.0) == "375"
        assert format_number(37.5) == "37.5"
