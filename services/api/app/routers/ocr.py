"""Plate OCR route."""

import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.dependencies import get_ocr
from app.schemas.ocr import OCRRequest, OCRResponse
from app.services.ocr_service import OCRService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ocr"])


@router.post("/ocr", response_model=OCRResponse)
async def recognize_plate(
    body: OCRRequest,
    ocr: OCRService = Depends(get_ocr),
):
    """Read a plate number from a camera frame."""
    try:
        result = await ocr.recognize(body.image)
    except (httpx.HTTPError, ValueError) as e:
        logger.error("OCR request failed: %s", e)
        failed = OCRResponse(error="OCR service unavailable")
        return JSONResponse(status_code=502, content=failed.model_dump(by_alias=True))

    return OCRResponse(
        plate=result.plate,
        confidence=result.confidence,
        raw_text=result.raw_text,
        error=result.error,
    )
