"""
Nomogram Engine

Explicit `assessment -> result` entry point. Callers ask for a fresh result
whenever they need one; nothing is recomputed behind their back.

Usage:
    from luto_nomogram.core.scoring import NomogramEngine, Assessment, Finding

    engine = NomogramEngine()
    result = engine.score(Assessment.from_findings([Finding.MEGACYSTIS]))
    print(result.probability, result.band.label)
"""
from __future__ import annotations

from typing import Dict, List

from luto_nomogram.utils import get_logger
from .base import Assessment, BreakdownTerm, DEFAULT_MODEL, Finding, NomogramModel, ScoreResult
from .nomogram import classify_risk, compute_logit, compute_probability

logger = get_logger(__name__)

FORMULA = "1 / (1 + e^-(Logit))"


class NomogramEngine:
    """
    Scores assessments against a fixed NomogramModel.

    Stateless — safe to share across requests.
    """

    def __init__(self, model: NomogramModel = DEFAULT_MODEL):
        self.model = model

    def score(self, assessment: Assessment) -> ScoreResult:
        logit = compute_logit(assessment, self.model)
        probability = compute_probability(logit)
        band = classify_risk(probability)
        logger.debug(
            f"NomogramEngine: {[f.value for f in assessment.active_findings()]} "
            f"→ logit={logit:.4f} p={probability:.4f} ({band.value})"
        )
        return ScoreResult(logit=logit, probability=probability, band=band)

    def breakdown(self, assessment: Assessment) -> List[BreakdownTerm]:
        """Intercept followed by each present finding's contribution."""
        terms = [BreakdownTerm(name="intercept", label="Baseline (Intercept)",
                               value=self.model.intercept)]
        for finding in assessment.active_findings():
            terms.append(BreakdownTerm(
                name=finding.value,
                label=finding.label,
                value=self.model.coefficient(finding),
            ))
        return terms

    def summarise(self, assessment: Assessment) -> Dict:
        """
        Build a compact summary dict suitable for JSON API responses.

        Example output:
        {
            "logit": 2.40955,
            "probability": 0.9175...,
            "percentage": 91.8,
            "band": "high",
            "label": "High Probability",
            "alert": false,
            "breakdown": [{...}, {...}, {...}],
            "no_additional_risk_factors": false
        }
        """
        result = self.score(assessment)
        summary = result.to_dict()
        summary["breakdown"] = [t.to_dict() for t in self.breakdown(assessment)]
        summary["no_additional_risk_factors"] = not assessment.present
        return summary

    def describe_model(self) -> Dict:
        """Published constants: intercept, coefficient table and citation."""
        return {
            "intercept": self.model.intercept,
            "coefficients": [
                {
                    "finding": f.value,
                    "label": f.label,
                    "coefficient": self.model.coefficient(f),
                }
                for f in Finding
            ],
            "baseline_prevalence": self.model.baseline_prevalence,
            "target_population": self.model.target_population,
            "formula": FORMULA,
            "citation": {
                "authors": self.model.citation.authors,
                "journal": self.model.citation.journal,
                "year": self.model.citation.year,
                "reference": str(self.model.citation),
            },
        }
