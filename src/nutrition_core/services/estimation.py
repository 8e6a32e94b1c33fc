"""Meal nutrition estimation via an LLM."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutrition_core.domain.meals import MealEstimate
from nutrition_core.errors import EstimatorFailure

ESTIMATE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {"type": "array", "items": {"type": "string"}},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
        "confidence": {"type": "string", "enum": ["low", "medium", "high"]},
        "notes": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": [
        "foods",
        "calories",
        "protein",
        "carbs",
        "fat",
        "confidence",
        "notes",
    ],
    "additionalProperties": False,
}

SYSTEM_PROMPT = (
    "You are a precise nutrition calculator. "
    "List the detected food items and return total calories and grams of "
    "protein, carbohydrates and fat for the whole meal. "
    "Use exact gram amounts when the user gives them and scale standard "
    "per-100g values proportionally. "
    "If no quantity is given, assume a standard serving and report low "
    "confidence. Put a short per-ingredient breakdown in notes."
)

_logger = logging.getLogger(__name__)


class EstimatorClient(Protocol):
    """Interface for LLM nutrition estimation."""

    async def estimate(
        self,
        *,
        instructions: str,
        text: str,
        image_data_url: str | None,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return a structured nutrition estimate."""


@dataclass
class EstimationService:
    """Service that prepares estimation prompts and validates results."""

    client: EstimatorClient

    async def estimate_text(self, description: str) -> MealEstimate:
        """Estimate macros for a free-text meal description."""
        if not description.strip():
            raise EstimatorFailure("Food description is required")
        return await self._estimate(
            text=f"Estimate the nutrition for: {description}", image_data_url=None
        )

    async def estimate_image(self, image_bytes: bytes) -> MealEstimate:
        """Estimate macros for a meal photo."""
        if not image_bytes:
            raise EstimatorFailure("Meal photo is empty")
        return await self._estimate(
            text="Identify the foods in this photo and estimate their nutrition.",
            image_data_url=_to_data_url(image_bytes),
        )

    async def _estimate(
        self, *, text: str, image_data_url: str | None
    ) -> MealEstimate:
        raw = await self.client.estimate(
            instructions=SYSTEM_PROMPT,
            text=text,
            image_data_url=image_data_url,
            schema=ESTIMATE_SCHEMA,
        )
        try:
            return MealEstimate.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Estimator returned an invalid payload: %s", exc)
            raise EstimatorFailure(
                "Estimator returned an invalid payload",
                {
                    "errors": exc.errors(
                        include_url=False, include_context=False, include_input=False
                    )
                },
            ) from exc


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
