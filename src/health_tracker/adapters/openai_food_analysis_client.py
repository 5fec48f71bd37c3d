"""Chat completions client for food nutrition estimates."""

from dataclasses import dataclass

from openai import APIStatusError, AsyncOpenAI

from health_tracker.services.foods import FoodAnalysisClient, FoodAnalysisError


@dataclass
class OpenAIFoodAnalysisClient(FoodAnalysisClient):
    """Food analysis client backed by an OpenAI-compatible gateway."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "OpenAIFoodAnalysisClient":
        """Create a client pointed at the AI gateway."""
        return cls(client=AsyncOpenAI(api_key=api_key, base_url=base_url))

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, str]],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Return the first choice's message content."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIStatusError as exc:
            raise FoodAnalysisError(f"AI Gateway error: {exc.status_code}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise RuntimeError("No response from AI")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
