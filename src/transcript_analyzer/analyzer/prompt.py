"""Prompt construction for legal transcript analysis.

Every call shares one paralegal system prompt.  The direct and synthesis
prompts end with the same three-section output template so that a single
parser handles both paths.
"""

from __future__ import annotations

from collections.abc import Sequence

from transcript_analyzer.text.types import Segment, SegmentType, Structure

LEGAL_SYSTEM_PROMPT = """\
You are an expert legal assistant with paralegal-level knowledge. You specialize in analyzing court transcripts and legal proceedings.

Your expertise includes:
- Legal procedures and terminology (civil and criminal)
- Evidence rules and objections (Federal Rules of Evidence)
- Court procedures and protocols
- Motion practice and legal deadlines
- Discovery processes
- Testimony analysis
- Legal document structure and formatting

When analyzing transcripts:
- Focus on legally significant moments (motions, rulings, key testimony)
- Identify procedural requirements and deadlines
- Note evidentiary issues and objections
- Track parties, witnesses, and exhibits
- Highlight action items requiring follow-up
- Use precise legal terminology
- Be objective and fact-based"""

OUTPUT_FORMAT = """\
KEY TAKEAWAYS:
[Your bullet points here]

SUMMARY:
[Your paragraphs here]

ACTION ITEMS:
[Your numbered list here]"""


def build_direct_prompt(text: str) -> str:
    """Single-call prompt embedding the full cleaned transcript."""
    return f"""\
Analyze this legal transcript and provide:

1. KEY TAKEAWAYS (5-7 critical bullet points highlighting the most important legal developments)
2. SUMMARY (2-3 paragraph narrative covering the proceedings chronologically)
3. ACTION ITEMS (numbered list with deadlines, responsible parties, and required actions)

Transcript:
{text}

Provide your analysis in this exact format:

{OUTPUT_FORMAT}"""


def build_segment_prompt(segment: Segment) -> str:
    """Ask the fast model for a 2-3 sentence summary of one key segment."""
    return (
        f"Summarize this {segment.type.value} segment from a legal transcript in "
        "2-3 sentences, focusing on legally significant details:\n\n"
        f"{segment.content}"
    )


def build_chunk_prompt(chunk_text: str) -> str:
    """Ask the fast model for a brief summary of one transcript excerpt."""
    return f"Provide a brief summary of this transcript excerpt:\n\n{chunk_text}"


def build_synthesis_prompt(
    structure: Structure,
    segment_summaries: Sequence[tuple[SegmentType, str]],
    chunk_summaries: Sequence[str],
) -> str:
    """Combine metadata and tier-1 summaries into the premium synthesis prompt.

    Args:
        structure: Structure of the cleaned transcript.
        segment_summaries: ``(type, summary)`` pairs in document order.
        chunk_summaries: Chronological chunk summaries (may be empty).

    Returns:
        Prompt ending with the three-section output template.
    """
    lines = [
        "Based on the following summaries and analysis of a legal transcript, "
        "provide a comprehensive analysis:",
        "",
        "TRANSCRIPT METADATA:",
        f"- Speakers: {', '.join(sorted(structure.speakers))}",
        f"- Sections: {', '.join(structure.sections)}",
        f"- Estimated length: {structure.estimated_tokens} tokens",
        "",
        "KEY SEGMENT SUMMARIES:",
    ]
    for idx, (segment_type, summary) in enumerate(segment_summaries, start=1):
        lines.append(f"{idx}. [{segment_type.value.upper()}] {summary}")

    if chunk_summaries:
        lines.append("")
        lines.append("CHRONOLOGICAL SUMMARIES:")
        for idx, summary in enumerate(chunk_summaries, start=1):
            lines.append(f"Part {idx}: {summary}")

    prompt = "\n".join(lines)
    return f"""\
{prompt}


Based on these summaries, provide:

1. KEY TAKEAWAYS (5-7 critical bullet points highlighting the most important legal developments)
2. SUMMARY (2-3 paragraph narrative covering the proceedings)
3. ACTION ITEMS (numbered list with deadlines, parties, and required actions)

Format your response as:

{OUTPUT_FORMAT}"""
