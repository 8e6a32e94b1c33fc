"""OpenAI Responses API client for nutrition estimation."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from nutrition_core.errors import EstimatorFailure
from nutrition_core.services.estimation import EstimatorClient


@dataclass
class OpenAIEstimatorClient(EstimatorClient):
    """Estimator backed by OpenAI Responses API structured outputs."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAIEstimatorClient":
        """Create an OpenAI estimator client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def estimate(
        self,
        *,
        instructions: str,
        text: str,
        image_data_url: str | None,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call OpenAI Responses API and decode the JSON output."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": text}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload: dict[str, object] = {
            "model": self.model,
            "instructions": instructions,
            "input": [{"role": "user", "content": content}],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_estimate",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise EstimatorFailure(f"OpenAI request failed: {exc}") from exc
        output_text = response.output_text
        if not output_text:
            raise EstimatorFailure("OpenAI returned an empty response")
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise EstimatorFailure("OpenAI returned malformed JSON") from exc
