"""Core database models"""
from .video_analysis import VideoAnalysis

__all__ = ["VideoAnalysis"]
