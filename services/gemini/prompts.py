"""Prompt builders for example-grounded visual inspection."""

from __future__ import annotations

from typing import Any, Dict, Iterable

from models.training_record import TrainingRecord

MAX_EXAMPLES = 10

INSPECTION_PREAMBLE = (
    "You are an expert visual quality inspector. "
    "Examine the provided image and classify it as good or bad, "
    "explaining the visible features that support your decision. "
    "Use the following previously reviewed examples as guidance for how this user classifies images."
)


def format_example(index: int, record: TrainingRecord) -> str:
    """Return one instruction line describing a reviewed example."""
    line = f"Example {index}: Classified as {record.classification.upper()}. Notes: {record.notes}"
    if record.annotations:
        count = len(record.annotations)
        line += f" ({count} annotation{'s' if count != 1 else ''} marked)"
    return line


def build_system_instruction(records: Iterable[TrainingRecord]) -> str:
    """Return the preamble followed by one line per qualifying example.

    Only the first `MAX_EXAMPLES` records are considered, and of those only
    the ones carrying both a classification and notes produce a line.
    """
    lines = [INSPECTION_PREAMBLE]
    qualifying = [
        record
        for record in list(records)[:MAX_EXAMPLES]
        if record.classification and record.notes
    ]
    for index, record in enumerate(qualifying, start=1):
        lines.append(format_example(index, record))
    return "\n".join(lines)


def augment_payload(payload: Dict[str, Any], instruction: str) -> Dict[str, Any]:
    """Return a copy of `payload` with `systemInstruction` set to `instruction`."""
    augmented = dict(payload)
    augmented["systemInstruction"] = {"parts": [{"text": instruction}]}
    return augmented
