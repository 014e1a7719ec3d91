"""Data Transfer Objects for service layer"""
from typing import Optional, List
from pydantic import BaseModel, Field

from core.schemas import CamelModel
from analysis.metrics import Metrics
from analysis.retention import RetentionPoint
from generation.schemas.seo import SeoAnalysis


class AnalyzeRequestDTO(BaseModel):
    """Service layer DTO for analysis requests; URL checks happen in the service"""
    url: Optional[str] = None


class AuthorDTO(CamelModel):
    username: str = ""
    profile_url: Optional[str] = None
    followers: int = 0


class VideoDTO(CamelModel):
    url: str = ""
    title: str = ""
    description: str = ""
    thumbnail: Optional[str] = None
    hashtags: List[str] = Field(default_factory=list)
    author: AuthorDTO = Field(default_factory=AuthorDTO)


class FormattedStatsDTO(CamelModel):
    """Compact display strings (1.2K, 3.4M) for the dashboard"""
    views: str = "0"
    likes: str = "0"
    comments: str = "0"
    shares: str = "0"
    saves: str = "0"


class StatsDTO(CamelModel):
    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0
    saves: int = 0
    formatted: FormattedStatsDTO = Field(default_factory=FormattedStatsDTO)


class RetentionDTO(CamelModel):
    curve: List[RetentionPoint] = Field(default_factory=list)
    average_retention: float = 0


class AnalysisDTO(CamelModel):
    """Assembled analysis returned to the caller and persisted"""
    id: Optional[int] = None
    timestamp: str
    video: VideoDTO = Field(default_factory=VideoDTO)
    stats: StatsDTO = Field(default_factory=StatsDTO)
    metrics: Metrics = Field(default_factory=Metrics)
    seo: SeoAnalysis = Field(default_factory=SeoAnalysis.unconfigured)
    retention: RetentionDTO = Field(default_factory=RetentionDTO)
    sources: List[str] = Field(default_factory=list)


class AnalyzeResponseDTO(BaseModel):
    """Service layer DTO for successful analysis responses"""
    success: bool = True
    analysis: AnalysisDTO


class HealthResponseDTO(BaseModel):
    """Service layer DTO for health check responses"""
    ok: bool = True
    database: str = "ok"
    timestamp: Optional[str] = None
    version: Optional[str] = None
