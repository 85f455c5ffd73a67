"""Food recognition service backed by a vision-capable LLM."""

import base64
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from calorie_tracker.domain.entries import FoodEstimate
from calorie_tracker.errors import RecognitionError

_NULLABLE_NUMBER = {"anyOf": [{"type": "number", "minimum": 0.0}, {"type": "null"}]}

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "food_name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0.0},
        "protein": {"type": "number", "minimum": 0.0},
        "carbs": {"type": "number", "minimum": 0.0},
        "fat": {"type": "number", "minimum": 0.0},
        "fiber": _NULLABLE_NUMBER,
        "sugar": _NULLABLE_NUMBER,
        "sodium": _NULLABLE_NUMBER,
        "serving_size": {"type": "string"},
        "confidence_score": {"type": "number", "minimum": 0.0, "maximum": 1.0},
    },
    "required": [
        "food_name",
        "calories",
        "protein",
        "carbs",
        "fat",
        "fiber",
        "sugar",
        "sodium",
        "serving_size",
        "confidence_score",
    ],
    "additionalProperties": False,
}

_PROMPT = (
    "Identify the meal in the image and estimate its nutrition for the visible "
    "portion. Return a short food name, calories in kcal, protein, carbs, fat, "
    "fiber and sugar in grams, sodium in milligrams, a serving size description "
    "and a confidence score between 0 and 1."
)


class RecognitionClient(Protocol):
    """Interface for structured LLM image extraction."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured extraction data."""


@dataclass
class RecognitionService:
    """Service that prepares recognition prompts and validates results."""

    client: RecognitionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(self, image_bytes: bytes) -> FoodEstimate:
        """Estimate nutrition for the meal in an image."""
        if not image_bytes:
            raise RecognitionError("Image is empty")
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=_to_data_url(image_bytes),
            schema=ESTIMATE_SCHEMA,
            prompt=_PROMPT,
        )
        try:
            return FoodEstimate.model_validate(raw)
        except ValidationError as exc:
            raise RecognitionError("Recognition returned an invalid estimate") from exc


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
