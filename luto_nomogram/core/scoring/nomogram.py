"""
LUTO Nomogram — Scoring Operations

Pure functions over an Assessment:

    logit       = intercept + Σ coefficient[f]  for every present finding f
    probability = 1 / (1 + e^(-logit))

Band thresholds are module-level constants expressed in percent. Each band
includes its lower bound, so exactly 20 % is MODERATE and exactly 95 % is
VERY_HIGH.
"""
from __future__ import annotations

import math
from typing import Union

from .base import Assessment, DEFAULT_MODEL, Finding, NomogramModel, RiskBand

# ── Band thresholds (percent) ─────────────────────────────────────────────────
MODERATE_THRESHOLD  = 20.0
HIGH_THRESHOLD      = 50.0
VERY_HIGH_THRESHOLD = 95.0


def toggle(assessment: Assessment, finding: Union[Finding, str]) -> Assessment:
    """Return a copy of `assessment` with one finding flipped."""
    return assessment.toggle(finding)


def reset() -> Assessment:
    """Fresh assessment with every finding absent."""
    return Assessment()


def compute_logit(assessment: Assessment, model: NomogramModel = DEFAULT_MODEL) -> float:
    logit = model.intercept
    for finding in assessment.active_findings():
        logit += model.coefficient(finding)
    return logit


def compute_probability(logit: float) -> float:
    return 1 / (1 + math.exp(-logit))


def classify_risk(probability: float) -> RiskBand:
    p = probability * 100
    if p < MODERATE_THRESHOLD:
        return RiskBand.LOW
    if p < HIGH_THRESHOLD:
        return RiskBand.MODERATE
    if p < VERY_HIGH_THRESHOLD:
        return RiskBand.HIGH
    return RiskBand.VERY_HIGH
