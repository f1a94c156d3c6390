"""Tests for key-segment identification."""

from __future__ import annotations

from transcript_analyzer.text import SegmentType, classify_line, identify_segments
from transcript_analyzer.text.segments import MAX_SEGMENT_LINES


class TestClassifyLine:
    def test_each_category(self) -> None:
        assert classify_line("MS. ROE: Objection, hearsay.") is SegmentType.MOTION
        assert classify_line("The request is granted.") is SegmentType.RULING
        assert classify_line("Marked for identification as People's 3.") is SegmentType.EVIDENCE
        assert classify_line("The witness testified earlier.") is SegmentType.TESTIMONY
        assert classify_line("Briefs are due on the deadline.") is SegmentType.DEADLINE

    def test_first_rule_wins(self) -> None:
        # "objection" (motion) and "the court" (ruling) both match
        assert classify_line("THE COURT: Objection noted.") is SegmentType.MOTION

    def test_keywords_are_word_bounded(self) -> None:
        assert classify_line("Nearby residents were present.") is None

    def test_no_match(self) -> None:
        assert classify_line("Good morning, everyone.") is None


class TestIdentifySegments:
    def test_no_keywords_yields_nothing(self) -> None:
        assert identify_segments("Good morning.\nPlease be seated.\nThank you.") == []

    def test_empty_text(self) -> None:
        assert identify_segments("") == []

    def test_type_change_closes_segment(self) -> None:
        text = "\n".join(
            [
                "Good morning.",
                "MR. DOE: Objection, hearsay.",
                "Sustained.",
                "THE COURT: Please continue.",
            ]
        )
        segments = identify_segments(text)

        assert [s.type for s in segments] == [SegmentType.MOTION, SegmentType.RULING]
        motion, ruling = segments
        assert motion.content == "MR. DOE: Objection, hearsay.\nSustained."
        assert (motion.start_line, motion.end_line) == (1, 3)
        assert ruling.content == "THE COURT: Please continue."
        assert (ruling.start_line, ruling.end_line) == (2, 4)

    def test_leading_unmatched_lines_are_ignored(self) -> None:
        text = "Preliminary remarks.\nMore remarks.\nObjection."
        segments = identify_segments(text)
        assert len(segments) == 1
        assert segments[0].content == "Objection."

    def test_context_lines_close_segment_at_limit(self) -> None:
        context = [f"Context line {n}." for n in range(1, MAX_SEGMENT_LINES)]
        text = "\n".join(
            ["Objection."] + context + ["Ignored after close.", "Objection again."]
        )
        segments = identify_segments(text)

        assert len(segments) == 2
        first, second = segments
        assert first.type is SegmentType.MOTION
        assert first.content.split("\n") == ["Objection."] + context
        assert first.end_line == MAX_SEGMENT_LINES
        assert "Ignored after close." not in second.content
        assert second.content == "Objection again."

    def test_same_type_lines_extend_segment(self) -> None:
        text = "Objection.\nOverruled.\nMotion withdrawn."
        segments = identify_segments(text)
        assert len(segments) == 1
        assert segments[0].content == text

    def test_segments_do_not_overlap(self) -> None:
        text = "\n".join(
            [
                "Objection.",
                "Filler one.",
                "The court so orders.",
                "Exhibit 4 is admitted.",
                "Filler two.",
                "The witness was sworn.",
            ]
        )
        segments = identify_segments(text)
        assert [s.type for s in segments] == [
            SegmentType.MOTION,
            SegmentType.RULING,
            SegmentType.EVIDENCE,
            SegmentType.TESTIMONY,
        ]
        # closed by a type change: start is first line - 1; at end of input: - 2
        assert [(s.start_line, s.end_line) for s in segments] == [(0, 2), (2, 3), (3, 5), (4, 6)]
        for earlier, later in zip(segments, segments[1:]):
            assert earlier.end_line < later.end_line
        assert "\n".join(s.content for s in segments) == text
