"""OpenAI Responses API client for meal photo recognition."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_tracker.errors import RecognitionError
from calorie_tracker.services.recognition import RecognitionClient

NUTRITIONIST_INSTRUCTIONS = (
    "You are a nutrition analyst estimating meals from photos. Judge portion "
    "size from plates, cutlery and packaging in the frame. When several foods "
    "share a plate, report them as one meal with a combined name and summed "
    "nutrition. Lower the confidence score when the food is partly hidden or "
    "the portion is hard to judge."
)


@dataclass
class OpenAIRecognitionClient(RecognitionClient):
    """Recognition client that asks an OpenAI model for a meal estimate."""

    client: AsyncOpenAI
    instructions: str = NUTRITIONIST_INSTRUCTIONS
    max_output_tokens: int | None = None

    @classmethod
    def create(cls, api_key: str) -> "OpenAIRecognitionClient":
        """Create a recognition client for the given API key."""
        return cls(client=AsyncOpenAI(api_key=api_key))

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
        """Send the meal photo and return the decoded estimate payload."""
        request_payload = self.build_request(
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
            image_data_url=image_data_url,
            schema=schema,
            prompt=prompt,
        )
        response = await self.client.responses.create(**request_payload)
        return _decode_estimate(response.output_text)

    def build_request(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Assemble the Responses API keyword arguments for one meal photo."""
        meal_photo = {
            "role": "user",
            "content": [
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": image_data_url, "detail": "high"},
            ],
        }
        request: dict[str, object] = {
            "model": model,
            "instructions": self.instructions,
            "input": [meal_photo],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_estimate",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request["reasoning"] = {"effort": reasoning_effort}
        if self.max_output_tokens is not None:
            request["max_output_tokens"] = self.max_output_tokens
        return request

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()


def _decode_estimate(output_text: str | None) -> dict[str, object]:
    if not output_text:
        raise RecognitionError("OpenAI returned an empty meal estimate")
    try:
        payload = json.loads(output_text)
    except json.JSONDecodeError as exc:
        raise RecognitionError("OpenAI returned a malformed meal estimate") from exc
    if not isinstance(payload, dict):
        raise RecognitionError("OpenAI meal estimate is not a JSON object")
    return payload
