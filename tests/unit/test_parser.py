"""Tests for the three-section response parser."""

from __future__ import annotations

from transcript_analyzer.analyzer import ParsedAnalysis, parse_structured_response


def test_parses_all_three_sections() -> None:
    content = "KEY TAKEAWAYS:\n- A\n\nSUMMARY:\nParagraph.\n\nACTION ITEMS:\n1. Do X"
    assert parse_structured_response(content) == ParsedAnalysis(
        key_takeaways="- A",
        summary="Paragraph.",
        action_items="1. Do X",
    )


def test_order_insensitive() -> None:
    content = "ACTION ITEMS:\n1. Do X\nSUMMARY:\nParagraph.\nKEY TAKEAWAYS:\n- A"
    parsed = parse_structured_response(content)
    assert parsed.key_takeaways == "- A"
    assert parsed.summary == "Paragraph."
    assert parsed.action_items == "1. Do X"


def test_case_insensitive_labels_and_extra_whitespace() -> None:
    content = "key takeaways:   \n\n  - A  \n\n\n  Summary:\tParagraph.   \n\nAction Items:\n\n1. Do X\n\n"
    parsed = parse_structured_response(content)
    assert parsed.key_takeaways == "- A"
    assert parsed.summary == "Paragraph."
    assert parsed.action_items == "1. Do X"


def test_missing_label_leaves_field_empty() -> None:
    parsed = parse_structured_response("KEY TAKEAWAYS:\n- A\n\nSUMMARY:\nParagraph.")
    assert parsed.action_items == ""
    assert parsed.summary == "Paragraph."


def test_preamble_without_label_is_ignored() -> None:
    content = "Here is my analysis.\nSUMMARY:\nParagraph."
    assert parse_structured_response(content) == ParsedAnalysis(summary="Paragraph.")


def test_multiline_section_bodies_are_kept() -> None:
    content = "KEY TAKEAWAYS:\n- A\n- B\n- C\nSUMMARY:\nFirst.\n\nSecond."
    parsed = parse_structured_response(content)
    assert parsed.key_takeaways == "- A\n- B\n- C"
    assert parsed.summary == "First.\n\nSecond."


def test_malformed_or_empty_input_never_raises() -> None:
    assert parse_structured_response("") == ParsedAnalysis()
    assert parse_structured_response(None) == ParsedAnalysis()
    assert parse_structured_response("no labels at all") == ParsedAnalysis()
