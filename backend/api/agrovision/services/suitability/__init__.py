"""Puntaje de aptitud de siembra."""
from .scorer import SuitabilityFactors, SuitabilityScorer, UnknownIdPolicy, get_recommendation

__all__ = [
    "SuitabilityFactors",
    "SuitabilityScorer",
    "UnknownIdPolicy",
    "get_recommendation",
]
