"""Discovery operations: prompt, rate limit, generate, extract."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from discovery.client import TextGenerator
from discovery.core import prompt as prompts
from discovery.core.extractor import extract_json, require_recommendations
from discovery.core.rate_limiter import RateLimiter
from discovery.errors import InvalidRequest


logger = logging.getLogger(__name__)

RAW_LOG_CHARS = 500


def _require_text(value: Optional[str], label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequest(f"{label} is required")
    return value


class DiscoveryService:
    def __init__(self, generator: TextGenerator, limiter: RateLimiter) -> None:
        self.generator = generator
        self.limiter = limiter

    def _generate_json(self, prompt: str) -> Dict[str, Any]:
        self.limiter.try_acquire()
        text = self.generator.generate(prompt)
        logger.debug("Raw model response: %s...", text[:RAW_LOG_CHARS])
        return extract_json(text)

    def recommend(self, user_prompt: str) -> Dict[str, Any]:
        user_prompt = _require_text(user_prompt, "User prompt")
        data = self._generate_json(prompts.recommendation_prompt(user_prompt))
        return require_recommendations(data)

    def search(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        query = _require_text(query, "Search query")
        return self.recommend(prompts.search_query(query, filters))

    def tool_details(self, tool_name: str) -> Dict[str, Any]:
        tool_name = _require_text(tool_name, "Tool name")
        return self._generate_json(prompts.tool_details_prompt(tool_name))

    def category_tools(self, category: str) -> Dict[str, Any]:
        category = _require_text(category, "Category")
        return self._generate_json(prompts.category_prompt(category))

    def industry_insights(self) -> Dict[str, Any]:
        return self._generate_json(prompts.insights_prompt())

    def compare(self, tools: Optional[List[str]]) -> Dict[str, Any]:
        if not isinstance(tools, list) or len(tools) < 2:
            raise InvalidRequest("At least 2 tools required for comparison")
        logger.info("Comparing %s tools", len(tools))
        return self._generate_json(prompts.comparison_prompt([str(tool) for tool in tools]))
