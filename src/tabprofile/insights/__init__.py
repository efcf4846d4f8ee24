"""Rule-based insights over dataset profiles."""

from tabprofile.insights.synthesizer import (
    correlation_strength,
    synthesize_insights,
    top_correlation_pairs,
)

__all__ = ["correlation_strength", "synthesize_insights", "top_correlation_pairs"]
