"""Plate recognition through the OCR.space API."""

import logging
from dataclasses import dataclass

import httpx

from app.config import Settings
from app.services.plates import extract_plate

logger = logging.getLogger(__name__)


@dataclass
class OCRResult:
    plate: str = ""
    confidence: float = 0.0
    raw_text: str = ""
    error: str | None = None


def _strip_data_url(image: str) -> str:
    """Accept either a ``data:image/...;base64,`` URL or bare base64."""
    if image.startswith("data:") and "," in image:
        return image.split(",", 1)[1]
    return image


class OCRService:
    def __init__(self, api_key: str, api_url: str) -> None:
        self._api_key = api_key
        self._api_url = api_url

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def recognize(self, image: str) -> OCRResult:
        """Run OCR on an image and pick out a plate.

        Raises httpx.HTTPError when the OCR service cannot be reached and
        ValueError when it answers with something other than JSON.
        """
        if not self.configured:
            return OCRResult(error="OCR not configured")

        form = {
            "base64Image": f"data:image/jpeg;base64,{_strip_data_url(image)}",
            "apikey": self._api_key,
            "language": "eng",
            "OCREngine": "2",
            "detectOrientation": "true",
            "scale": "true",
        }

        async with httpx.AsyncClient(timeout=30) as client:
            response = await client.post(self._api_url, data=form)
            response.raise_for_status()
            data = response.json()

        parsed = data.get("ParsedResults") or []
        if not parsed:
            logger.info("OCR returned no text: %s", data.get("ErrorMessage"))
            return OCRResult(error="No text detected")

        text = parsed[0].get("ParsedText") or ""
        plate, confidence = extract_plate(text)
        return OCRResult(plate=plate, confidence=confidence, raw_text=text)


def get_ocr_service(settings: Settings) -> OCRService:
    return OCRService(
        api_key=settings.ocr_space_api_key.get_secret_value(),
        api_url=settings.ocr_space_url,
    )
