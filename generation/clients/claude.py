import httpx
import json
import logging
import time
from typing import Any, Dict, List, Optional
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from generation.schemas.seo import SeoAnalysis
from generation.clients.model_client import SeoModelClient

logger = logging.getLogger(__name__)

class ClaudeSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    anthropic_api_key: Optional[str] = None
    claude_model: str = "claude-3-haiku-20240307"
    claude_api_url: str = "https://api.anthropic.com/v1/messages"
    claude_timeout: float = 30.0

class ClaudeSeoClient(SeoModelClient):
    def __init__(self, settings: Optional[ClaudeSettings] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or ClaudeSettings()
        self.client = client or httpx.Client(
            timeout=self.settings.claude_timeout,
            headers={
                "x-api-key": self.settings.anthropic_api_key or "",
                "content-type": "application/json",
                "anthropic-version": "2023-06-01"
            }
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.client.close()

    def classify(self, description: str, hashtags: List[str], trace_id: str) -> SeoAnalysis:
        """Classify caption and hashtags with a single call, falling back on any error"""
        if not self.settings.anthropic_api_key:
            logger.info("Classifier not configured, using static fallback", extra={
                "trace_id": trace_id
            })
            return SeoAnalysis.unconfigured()

        start_time = time.time()
        try:
            response_data = self._call_claude_api(description, hashtags)
            analysis = self._parse_response(response_data, trace_id)
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            # ValidationError and JSONDecodeError are ValueErrors
            logger.warning(f"Classification failed: {e}", extra={
                "trace_id": trace_id,
                "error_type": type(e).__name__
            })
            return SeoAnalysis.classifier_error()

        logger.info("Classification successful", extra={
            "trace_id": trace_id,
            "latency_ms": int((time.time() - start_time) * 1000)
        })
        return analysis

    def _call_claude_api(self, description: str, hashtags: List[str]) -> Dict[str, Any]:
        """Call Claude API with the classification prompt"""
        payload = {
            "model": self.settings.claude_model,
            "max_tokens": 500,
            "messages": [
                {
                    "role": "user",
                    "content": self._build_prompt(description, hashtags)
                }
            ]
        }

        response = self.client.post(self.settings.claude_api_url, json=payload)
        response.raise_for_status()
        return response.json()

    def _build_prompt(self, description: str, hashtags: List[str]) -> str:
        """Build the SEO/niche classification prompt"""
        hashtags_str = ", ".join(f"#{tag}" for tag in hashtags) or "(none)"

        prompt = f"""
Analyze the discoverability of this TikTok video from its caption and hashtags.

Input:
- Caption: {description or "(empty)"}
- Hashtags: {hashtags_str}

Requirements:
1. score: integer 0-100 rating how well caption and hashtags support search and the For You feed
2. niche: short label for the content niche (e.g. "cooking", "fitness", "comedy")
3. recommendations: at most 3 short, concrete suggestions

Respond with JSON only:
{{
  "score": 72,
  "niche": "cooking",
  "recommendations": ["suggestion 1", "suggestion 2", "suggestion 3"]
}}
"""
        return prompt

    def _parse_response(self, response_data: Dict[str, Any], trace_id: str) -> SeoAnalysis:
        """Parse Claude API response and validate"""
        content = response_data["content"][0]["text"]
        if not isinstance(content, str):
            raise ValueError("Classifier response text is not a string")

        # Extract JSON from response
        json_start = content.find('{')
        json_end = content.rfind('}') + 1

        if json_start == -1 or json_end == 0:
            logger.warning("No JSON found in classifier response", extra={
                "trace_id": trace_id
            })
            raise ValueError("No JSON found in response")

        parsed_data = json.loads(content[json_start:json_end])

        # Validate with Pydantic (guardrails included)
        try:
            return SeoAnalysis.model_validate(parsed_data)
        except ValidationError:
            logger.warning("Classifier output rejected by guardrails", extra={
                "trace_id": trace_id
            })
            raise
