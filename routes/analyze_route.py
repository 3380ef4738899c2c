import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, Request

from controllers.analyze_controller import analyze
from utils.errors import RelayError

LOGGER = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze")
async def analyze_route(request: Request, payload: Dict[str, Any] = Body(...)):
    """Relay a generateContent payload upstream with example-grounded instructions."""
    try:
        return await analyze(request, payload)
    except HTTPException:
        raise
    except RelayError as exc:
        raise HTTPException(status_code=500, detail="Server error") from exc
    except Exception as exc:
        LOGGER.exception("Unexpected error relaying analysis request")
        raise HTTPException(status_code=500, detail="Server error") from exc
