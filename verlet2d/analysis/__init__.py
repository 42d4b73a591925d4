"""Analysis/reporting layer."""

from .metrics import centroid, overlap_stats, radius_stats, speed_stats, temperature_stats
from .reports import AnalyzeArtifacts, build_metrics_report, run_metrics_analysis

__all__ = [
    "AnalyzeArtifacts",
    "build_metrics_report",
    "centroid",
    "overlap_stats",
    "radius_stats",
    "run_metrics_analysis",
    "speed_stats",
    "temperature_stats",
]
