"""Analysis service: one sequential pipeline per submitted URL"""
import logging
import time

from analysis.metrics import calculate_metrics
from analysis.retention import generate_retention_curve
from collection.acquirer import VideoAcquirer
from generation.clients.model_client import SeoModelClient
from service.assembler import assemble_analysis
from service.dto import AnalyzeRequestDTO, AnalyzeResponseDTO
from service.persistence import AnalysisSink
from service.validation import validate_video_url

logger = logging.getLogger(__name__)


def analyze_video(
    dto: AnalyzeRequestDTO,
    *,
    trace_id: str,
    acquirer: VideoAcquirer,
    seo_client: SeoModelClient,
    sink: AnalysisSink
) -> AnalyzeResponseDTO:
    """
    Analyze one TikTok video.

    Args:
        dto: Request DTO carrying the URL
        trace_id: Request tracing ID
        acquirer: Ordered acquisition strategies
        seo_client: Caption/hashtag classifier
        sink: Persistence sink

    Returns:
        AnalyzeResponseDTO: Assembled analysis, ``id`` None if not saved

    Raises:
        InvalidVideoUrlError: URL rejected before any upstream call
        ConfigurationError: An enabled strategy lacks its credentials
    """
    start_time = time.time()

    url = validate_video_url(dto.url)

    logger.info("Starting video analysis", extra={
        "trace_id": trace_id,
        "strategies": [s.name for s in acquirer.strategies]
    })

    record, sources = acquirer.acquire(url, trace_id)

    metrics = calculate_metrics(
        views=record.views,
        likes=record.likes,
        comments=record.comments,
        shares=record.shares,
        saves=record.saves
    )
    curve = generate_retention_curve(metrics.engagement_rate)
    seo = seo_client.classify(record.description, record.hashtags, trace_id)

    analysis = assemble_analysis(record, metrics, curve, seo, sources=sources)
    analysis.id = sink.save(analysis, trace_id)

    latency_ms = int((time.time() - start_time) * 1000)
    logger.info("Video analysis completed", extra={
        "trace_id": trace_id,
        "latency_ms": latency_ms,
        "sources": sources,
        "saved": analysis.id is not None
    })

    return AnalyzeResponseDTO(success=True, analysis=analysis)
