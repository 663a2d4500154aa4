"""
EventLens insights module - event classification and insight generation.
"""

from eventlens.insights.classifier import (
    BirthdayClassifier,
    classify,
    classify_event,
    extract_name,
)
from eventlens.insights.generator import ContentGenerator, generate_fallback_insight
from eventlens.insights.models import (
    Classification,
    EventCategory,
    EventDescriptor,
    Insight,
    PipelineOutcome,
    PipelineState,
    Urgency,
)
from eventlens.insights.pipeline import (
    InsightPipeline,
    generate_insight,
    generate_insight_async,
)
from eventlens.insights.remote import RemoteCandidate, RemoteSummarizer

__all__ = [
    # Models
    "Classification",
    "EventCategory",
    "EventDescriptor",
    "Insight",
    "PipelineOutcome",
    "PipelineState",
    "Urgency",
    # Classifier
    "BirthdayClassifier",
    "classify",
    "classify_event",
    "extract_name",
    # Generator
    "ContentGenerator",
    "generate_fallback_insight",
    # Remote
    "RemoteCandidate",
    "RemoteSummarizer",
    # Pipeline
    "InsightPipeline",
    "generate_insight",
    "generate_insight_async",
]
