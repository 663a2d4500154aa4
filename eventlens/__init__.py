"""EventLens - Summaries and suggestions for calendar events"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so lightweight modules load without pulling in HTTP clients
def __getattr__(name: str):
    """
    Lazy imports to avoid loading heavy dependencies when only importing lightweight modules.
    """
    if name in ("generate_insight", "InsightPipeline"):
        from eventlens.insights import pipeline

        if name == "generate_insight":
            return pipeline.generate_insight
        if name == "InsightPipeline":
            return pipeline.InsightPipeline

    if name in ("EventDescriptor", "Insight"):
        from eventlens.insights import models

        if name == "EventDescriptor":
            return models.EventDescriptor
        if name == "Insight":
            return models.Insight

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "EventDescriptor",
    "Insight",
    "InsightPipeline",
    "generate_insight",
]
