"""
Pipeline module - Runs rounding, shadow synthesis and compositing in order.
"""

from roundshadow.pipeline.driver import PipelineResult, run_pipeline, process_bytes

__all__ = [
    "PipelineResult",
    "run_pipeline",
    "process_bytes",
]
