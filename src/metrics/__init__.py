"""Architecture metrics."""

from metrics.calculator import ArchitectureMetrics, calculate_metrics, compute_fan_stats

__all__ = ["ArchitectureMetrics", "calculate_metrics", "compute_fan_stats"]
