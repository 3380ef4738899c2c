"""Training example CRUD helpers."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import Request

from dal.training_dal import TrainingStore


def _store(request: Request) -> TrainingStore:
    return request.app.state.training_store


async def add_example(request: Request, data: Dict[str, Any]) -> Dict[str, Any]:
    """Persist a new example at the head of the store."""
    _, total = await _store(request).insert(data)
    return {
        "success": True,
        "message": "Training data saved successfully",
        "totalEntries": total,
    }


async def list_examples(request: Request) -> List[Dict[str, Any]]:
    """Return every stored example, newest first."""
    records = await _store(request).list_or_empty()
    return [record.to_dict() for record in records]


async def delete_example(request: Request, record_id: str) -> Dict[str, Any]:
    """Remove an example by id; unknown ids still succeed."""
    total = await _store(request).delete(record_id)
    return {
        "success": True,
        "message": "Training entry deleted",
        "totalEntries": total,
    }
