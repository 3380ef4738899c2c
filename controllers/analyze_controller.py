"""Controller for example-grounded image analysis."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import Request

from dal.training_dal import TrainingStore
from services.gemini.prompts import MAX_EXAMPLES, augment_payload, build_system_instruction
from services.gemini.relay_client import GeminiRelay


async def analyze(request: Request, payload: Dict[str, Any]) -> Any:
    """Inject the example-derived system instruction and relay the payload upstream.

    Args:
        request: FastAPI Request (used to access app.state for the store and relay).
        payload: Opaque generateContent body supplied by the client.

    Returns:
        The upstream JSON body, unmodified.

    Raises:
        RelayError: If the upstream call fails or returns a non-JSON body.
    """
    store: TrainingStore = request.app.state.training_store
    relay: GeminiRelay = request.app.state.relay

    records = await store.list_or_empty()
    instruction = build_system_instruction(records[:MAX_EXAMPLES])
    return await relay.forward(augment_payload(payload, instruction))
