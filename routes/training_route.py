"""FastAPI routes for managing stored training examples."""

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.training_controller import add_example, delete_example, list_examples
from utils.errors import StorageWriteError, ValidationError

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["training"])


class TrainingPayload(BaseModel):
    # image and classification are checked by the store so missing values map to 400
    image: Optional[str] = None
    mimeType: Optional[str] = None
    classification: Optional[str] = None
    notes: Optional[str] = None
    annotations: Optional[List[Any]] = None
    timestamp: Optional[str] = None
    id: Optional[str] = None


@router.post("/training")
async def add_training_route(request: Request, payload: TrainingPayload):
    try:
        return await add_example(request, payload.model_dump(exclude_none=True))
    except HTTPException:
        raise
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StorageWriteError as exc:
        raise HTTPException(status_code=500, detail="Failed to save training data") from exc
    except Exception as exc:
        LOGGER.exception("Unexpected error saving training data")
        raise HTTPException(status_code=500, detail="Failed to save training data") from exc


@router.get("/training-history")
async def training_history_route(request: Request):
    try:
        return await list_examples(request)
    except HTTPException:
        raise
    except Exception as exc:
        LOGGER.exception("Unexpected error listing training data")
        raise HTTPException(status_code=500, detail="Failed to load training data") from exc


@router.delete("/training/{record_id}")
async def delete_training_route(request: Request, record_id: str):
    try:
        return await delete_example(request, record_id)
    except HTTPException:
        raise
    except StorageWriteError as exc:
        raise HTTPException(status_code=500, detail="Failed to delete training data") from exc
    except Exception as exc:
        LOGGER.exception("Unexpected error deleting training data")
        raise HTTPException(status_code=500, detail="Failed to delete training data") from exc
