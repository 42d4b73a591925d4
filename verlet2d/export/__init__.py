"""Export manager and format-specific writers."""

from .history_writer import save_history_csv, save_history_png
from .manager import export_results
from .metrics_writer import flatten_metrics, save_metrics_csv, save_metrics_json
from .png_writer import save_snapshot_png

__all__ = [
    "export_results",
    "flatten_metrics",
    "save_history_csv",
    "save_history_png",
    "save_metrics_csv",
    "save_metrics_json",
    "save_snapshot_png",
]
