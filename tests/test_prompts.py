from models.training_record import TrainingRecord
from services.gemini.prompts import (
    INSPECTION_PREAMBLE,
    MAX_EXAMPLES,
    augment_payload,
    build_system_instruction,
)


def _record(i, classification="good", notes="looks fine", annotations=None):
    return TrainingRecord(
        id=str(i),
        image="aGk=",
        classification=classification,
        notes=notes,
        annotations=annotations or [],
    )


def test_empty_store_yields_preamble_only():
    assert build_system_instruction([]) == INSPECTION_PREAMBLE


def test_examples_in_head_to_tail_order():
    records = [_record(1, "bad", "dent near edge"), _record(2, "good", "clean weld")]

    lines = build_system_instruction(records).split("\n")

    assert lines[0] == INSPECTION_PREAMBLE
    assert len(lines) == 3
    assert "BAD" in lines[1] and "dent near edge" in lines[1]
    assert "GOOD" in lines[2] and "clean weld" in lines[2]


def test_records_without_notes_are_skipped():
    records = [_record(1, notes=""), _record(2, notes="ok")]
    lines = build_system_instruction(records).split("\n")
    assert lines[1:] == ["Example 1: Classified as GOOD. Notes: ok"]


def test_annotation_count_suffix():
    line = build_system_instruction([_record(1, annotations=[{}, {}])]).split("\n")[1]
    assert line.endswith("(2 annotations marked)")
    line = build_system_instruction([_record(1, annotations=[{}])]).split("\n")[1]
    assert line.endswith("(1 annotation marked)")


def test_only_most_recent_examples_are_used():
    records = [_record(i, notes=f"note {i}") for i in range(MAX_EXAMPLES + 3)]
    lines = build_system_instruction(records).split("\n")
    assert len(lines) == MAX_EXAMPLES + 1
    assert "note 0" in lines[1]
    assert f"note {MAX_EXAMPLES - 1}" in lines[-1]


def test_augment_payload_overwrites_without_mutating():
    payload = {"contents": [], "systemInstruction": {"parts": [{"text": "client"}]}}
    augmented = augment_payload(payload, "server")

    assert augmented["systemInstruction"] == {"parts": [{"text": "server"}]}
    assert payload["systemInstruction"] == {"parts": [{"text": "client"}]}
    assert augmented["contents"] == []
