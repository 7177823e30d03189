"""OCR schemas."""

from pydantic import BaseModel, Field


class OCRRequest(BaseModel):
    # Data URL ("data:image/jpeg;base64,...") or bare base64
    image: str = Field(..., min_length=1)


class OCRResponse(BaseModel):
    plate: str = ""
    confidence: float = 0.0
    raw_text: str = Field("", serialization_alias="rawText")
    error: str | None = None
