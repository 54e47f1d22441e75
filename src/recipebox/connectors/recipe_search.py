"""Recipe search through an OpenAI-compatible chat completions API."""

import json
import re
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from recipebox.config import get_settings
from recipebox.connectors.base import (
    ConnectorError,
    ConnectorNotConfiguredError,
    ConnectorResponse,
)
from recipebox.logging_config import get_logger
from recipebox.schemas import RecipeDraft

logger = get_logger(__name__)

_RECIPE_LIST = TypeAdapter(list[RecipeDraft])
_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)

SEARCH_PROMPT = """You are a helpful cooking assistant. Find and return {count} recipe \
suggestions based on this search query: "{query}".

The user's skill level is: {skill_level}

Return the results as a JSON array with the following structure for each recipe:
[
  {{
    "title": "Recipe Name",
    "description": "Brief description",
    "ingredients": ["ingredient 1", "ingredient 2", ...],
    "instructions": ["step 1", "step 2", ...],
    "prepTime": minutes as number,
    "cookTime": minutes as number,
    "servings": number,
    "difficulty": "BEGINNER" | "INTERMEDIATE" | "ADVANCED",
    "category": "category name"
  }}
]

Write each ingredient as quantity first, then the ingredient, e.g. "400g spaghetti".
Make sure to match recipes appropriate for the {skill_level} skill level. \
Return ONLY the JSON array, no additional text."""


def build_search_prompt(query: str, skill_level: str, count: int) -> str:
    return SEARCH_PROMPT.format(query=query, skill_level=skill_level, count=count)


def parse_recipe_content(content: str | None) -> list[RecipeDraft]:
    """
    Parse the model's reply into recipe drafts.

    Accepts a bare JSON array, an array wrapped in a Markdown code fence, or
    an object holding the array under ``"recipes"``.

    Raises:
        ConnectorError: The reply is empty or not a valid list of recipes.
    """
    if not content or not content.strip():
        raise ConnectorError("Language model returned no content")

    text = content.strip()
    if fence := _CODE_FENCE.match(text):
        text = fence.group(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Recipe search returned invalid JSON: {e}")
        raise ConnectorError("Language model returned invalid JSON", response=text[:500]) from e

    if isinstance(data, dict) and "recipes" in data:
        data = data["recipes"]

    try:
        return _RECIPE_LIST.validate_python(data)
    except ValidationError as e:
        logger.warning(f"Recipe search returned unexpected structure: {e.error_count()} errors")
        raise ConnectorError(
            "Language model returned recipes in an unexpected format", response=text[:500]
        ) from e


class RecipeSearchConnector:
    """Connector for recipe suggestions from a hosted language model."""

    DEFAULT_TIMEOUT = 30.0
    MAX_RETRIES = 3
    BACKOFF_BASE = 1
    BACKOFF_MAX = 20

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        result_count: int | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.model = model or settings.openai_model
        self.temperature = temperature if temperature is not None else settings.openai_temperature
        self.timeout = timeout or settings.recipe_search_timeout or self.DEFAULT_TIMEOUT
        self.max_retries = max_retries or settings.recipe_search_max_retries or self.MAX_RETRIES
        self.result_count = result_count or settings.recipe_search_result_count
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        """Return connector name."""
        return "recipe-search"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Accept": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                    "User-Agent": "Recipebox/1.0",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, endpoint: str, payload: dict[str, Any]) -> ConnectorResponse:
        """POST a JSON payload with retry on timeouts and network errors."""
        url = f"{self.base_url}/{endpoint}"
        client = await self._get_client()

        @retry(
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.BACKOFF_BASE, max=self.BACKOFF_MAX),
            reraise=False,
        )
        async def _do_request() -> httpx.Response:
            return await client.post(url, json=payload)

        try:
            response = await _do_request()
        except RetryError as e:
            logger.error(f"Request failed after {self.max_retries} attempts: {url}")
            raise ConnectorError(
                f"Request failed after {self.max_retries} attempts",
                response=str(e),
            ) from e

        if response.status_code >= 400:
            error_detail = response.text[:500] if response.text else "No details"
            logger.error(f"API error {response.status_code} for {url}: {error_detail}")
            raise ConnectorError(
                f"API request failed with status {response.status_code}",
                status_code=response.status_code,
                response=error_detail,
            )

        try:
            data = response.json() if response.text else {}
        except ValueError as e:
            raise ConnectorError("API returned a non-JSON response") from e

        return ConnectorResponse(
            data=data,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    async def search_recipes(self, query: str, skill_level: str = "BEGINNER") -> list[RecipeDraft]:
        """
        Ask the language model for recipes matching a free-text query.

        Args:
            query: What the user is looking for, e.g. "quick vegetarian pasta".
            skill_level: BEGINNER, INTERMEDIATE or ADVANCED.

        Returns:
            Recipe drafts, not yet stored.

        Raises:
            ConnectorNotConfiguredError: No API key is configured.
            ConnectorError: The API call failed or returned unusable content.
        """
        if not self.is_configured:
            raise ConnectorNotConfiguredError("OPENAI_API_KEY")

        logger.info(f"Searching recipes: query='{query}', skill_level={skill_level}")

        response = await self._request(
            "chat/completions",
            {
                "model": self.model,
                "messages": [
                    {
                        "role": "user",
                        "content": build_search_prompt(query, skill_level, self.result_count),
                    }
                ],
                "temperature": self.temperature,
            },
        )

        try:
            content = response.data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ConnectorError("Unexpected completion response shape") from e

        recipes = parse_recipe_content(content)
        logger.info(
            f"Recipe search returned {len(recipes)} recipes for '{query}'",
            extra={"upstream_request_id": response.request_id},
        )
        return recipes

    async def __aenter__(self) -> "RecipeSearchConnector":
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit."""
        await self.close()
