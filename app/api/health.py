"""Health check API endpoints"""
from fastapi import APIRouter, Depends

from app.deps.common import get_analysis_sink
from service.health_service import get_health
from service.dto import HealthResponseDTO
from service.persistence import AnalysisSink

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponseDTO)
def health_check(sink: AnalysisSink = Depends(get_analysis_sink)) -> HealthResponseDTO:
    """Liveness and database reachability, using the sink's session factory"""
    return get_health(sink.session_factory)
