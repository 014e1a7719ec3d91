"""Common dependencies for FastAPI dependency injection"""
import uuid
from datetime import datetime, timezone
from typing import Generator

from core.db import SessionLocal
from collection.acquirer import VideoAcquirer, create_acquirer
from generation.clients.claude import ClaudeSeoClient, ClaudeSettings
from generation.clients.model_client import SeoModelClient, StaticSeoClient
from service.persistence import AnalysisSink

# Built once at import; holds only the session factory
analysis_sink = AnalysisSink(SessionLocal)


def get_trace_id() -> str:
    """
    Generate unique trace ID for request tracking.

    Returns:
        str: Unique trace ID
    """
    return f"api_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"


def get_acquirer() -> Generator[VideoAcquirer, None, None]:
    """
    Acquisition chain built from ACQUISITION_STRATEGIES.

    Yields:
        VideoAcquirer: Strategies in priority order, closed after the request
    """
    acquirer = create_acquirer()
    try:
        yield acquirer
    finally:
        acquirer.close()


def get_seo_client() -> Generator[SeoModelClient, None, None]:
    """
    Classifier dependency.

    Returns the Claude-backed client when ANTHROPIC_API_KEY is set,
    otherwise the static fallback.
    """
    settings = ClaudeSettings()
    client: SeoModelClient = ClaudeSeoClient(settings) if settings.anthropic_api_key else StaticSeoClient()
    try:
        yield client
    finally:
        client.close()


def get_analysis_sink() -> AnalysisSink:
    """Process-wide persistence sink"""
    return analysis_sink
