"""
Scoring Layer

Logistic-regression nomogram for prenatal LUTO / Prune Belly Syndrome.

Usage:
    from luto_nomogram.core.scoring import NomogramEngine, Assessment

    engine = NomogramEngine()
    summary = engine.summarise(Assessment.from_dict({"megacystis": True}))
"""
from .base import (
    Assessment,
    BreakdownTerm,
    Citation,
    DEFAULT_MODEL,
    Finding,
    NomogramModel,
    RiskBand,
    ScoreResult,
)
from .nomogram import toggle, reset, compute_logit, compute_probability, classify_risk
from .engine import NomogramEngine

__all__ = [
    "Assessment",
    "BreakdownTerm",
    "Citation",
    "DEFAULT_MODEL",
    "Finding",
    "NomogramModel",
    "RiskBand",
    "ScoreResult",
    "toggle",
    "reset",
    "compute_logit",
    "compute_probability",
    "classify_risk",
    "NomogramEngine",
]
