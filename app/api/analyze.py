import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.deps.common import get_trace_id, get_acquirer, get_seo_client, get_analysis_sink
from core.errors import ConfigurationError, InvalidVideoUrlError
from collection.acquirer import VideoAcquirer
from generation.clients.model_client import SeoModelClient
from service.analysis_service import analyze_video
from service.dto import AnalyzeRequestDTO, AnalyzeResponseDTO
from service.persistence import AnalysisSink

logger = logging.getLogger(__name__)
router = APIRouter(tags=["analysis"])


@router.post("/analyze-tiktok", response_model=AnalyzeResponseDTO)
def analyze_tiktok(
    request: AnalyzeRequestDTO,
    trace_id: str = Depends(get_trace_id),
    acquirer: VideoAcquirer = Depends(get_acquirer),
    seo_client: SeoModelClient = Depends(get_seo_client),
    sink: AnalysisSink = Depends(get_analysis_sink)
):
    """Analyze the public metadata and engagement of a TikTok video"""
    try:
        logger.info("Analyze API request received", extra={
            "trace_id": trace_id
        })

        response = analyze_video(
            request,
            trace_id=trace_id,
            acquirer=acquirer,
            seo_client=seo_client,
            sink=sink
        )

        logger.info("Analyze API request completed", extra={
            "trace_id": trace_id,
            "status_code": 200
        })

        return response

    except InvalidVideoUrlError as e:
        logger.warning("Invalid video URL", extra={
            "trace_id": trace_id,
            "status_code": 400
        })
        return JSONResponse(status_code=400, content={"error": e.message})

    except ConfigurationError as e:
        logger.error("Configuration error", extra={
            "trace_id": trace_id,
            "status_code": 500
        })
        return JSONResponse(
            status_code=500,
            content={"error": "Server configuration error", "details": e.message}
        )

    except Exception as e:
        logger.exception("Unexpected error during analysis", extra={
            "trace_id": trace_id,
            "status_code": 500,
            "error_type": type(e).__name__
        })
        return JSONResponse(
            status_code=500,
            content={"error": "Analysis failed", "details": str(e)}
        )
