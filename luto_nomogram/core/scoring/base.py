"""
LUTO Nomogram — Base Types

Defines the closed finding set, the immutable regression model and the
value types that flow between the scorer, the engine and the API layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Union

from luto_nomogram.utils.exceptions import InvalidFindingError


class Finding(str, Enum):
    """
    Prenatal ultrasound findings used as binary predictors.

    Values are the wire identifiers accepted by the API. Declaration order
    is the canonical order for sums and breakdowns.
    """
    OLIGOHYDRAMNIOS               = "oligohydramnios"
    BILATERAL_HN                  = "bilateralHN"
    BILATERAL_URETERAL_DILATATION = "bilateralUreteralDilatation"
    MEGACYSTIS                    = "megacystis"
    BLADDER_THICKENING            = "bladderThickening"
    URINOMA                       = "urinoma"

    @property
    def label(self) -> str:
        return _FINDING_LABELS[self]

    @classmethod
    def parse(cls, value: Union["Finding", str]) -> "Finding":
        """Resolve a wire identifier, raising InvalidFindingError if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidFindingError(value, valid_findings=[f.value for f in cls])


_FINDING_LABELS: Dict[Finding, str] = {
    Finding.OLIGOHYDRAMNIOS:               "Oligohydramnios",
    Finding.BILATERAL_HN:                  "Bilateral Hydronephrosis",
    Finding.BILATERAL_URETERAL_DILATATION: "Bilateral Ureteral Dilatation",
    Finding.MEGACYSTIS:                    "Megacystis",
    Finding.BLADDER_THICKENING:            "Bladder Thickening",
    Finding.URINOMA:                       "Urinoma",
}


class RiskBand(str, Enum):
    """
    Ordinal probability bands.

    LOW        – below 20 %
    MODERATE   – 20 % up to 50 %
    HIGH       – 50 % up to 95 %
    VERY_HIGH  – 95 % and above
    """
    LOW       = "low"
    MODERATE  = "moderate"
    HIGH      = "high"
    VERY_HIGH = "very_high"

    @property
    def label(self) -> str:
        return _BAND_LABELS[self]


_BAND_LABELS: Dict[RiskBand, str] = {
    RiskBand.LOW:       "Low Probability",
    RiskBand.MODERATE:  "Moderate Probability",
    RiskBand.HIGH:      "High Probability",
    RiskBand.VERY_HIGH: "Very High Probability",
}


@dataclass(frozen=True)
class Citation:
    """Source study for the published coefficients."""
    authors: str
    journal: str
    year: int

    def __str__(self) -> str:
        return f"{self.authors}, {self.journal} ({self.year})"


@dataclass(frozen=True)
class NomogramModel:
    """
    Logistic regression model: intercept plus one weight per finding.

    The coefficient table is wrapped in a read-only mapping on construction.
    """
    intercept: float
    coefficients: Mapping[Finding, float]
    citation: Citation
    baseline_prevalence: float = 0.06
    target_population: str = ""

    def __post_init__(self):
        missing = [f.value for f in Finding if f not in self.coefficients]
        if missing:
            raise ValueError(f"NomogramModel: no coefficient for {missing}")
        object.__setattr__(self, "coefficients", MappingProxyType(dict(self.coefficients)))

    def coefficient(self, finding: Finding) -> float:
        return self.coefficients[finding]


# Rickard et al. 2023, Bayesian meta-regression of prenatal ultrasound findings
DEFAULT_MODEL = NomogramModel(
    intercept=-2.7515,
    coefficients={
        Finding.OLIGOHYDRAMNIOS:               1.778,
        Finding.BILATERAL_HN:                  1.8444,
        Finding.BILATERAL_URETERAL_DILATATION: 3.23253,
        Finding.MEGACYSTIS:                    3.38305,
        Finding.BLADDER_THICKENING:            2.27534,
        Finding.URINOMA:                       1.7466412,
    },
    citation=Citation(
        authors="Rickard, Kim, Mieghem et al.",
        journal="Prenatal Diagnosis",
        year=2023,
    ),
    baseline_prevalence=0.06,
    target_population=(
        "Male fetuses with moderate-to-severe hydronephrosis (SFU Grade 3-4)"
    ),
)


@dataclass(frozen=True)
class Assessment:
    """
    Presence flags for all six findings.

    Stored as the set of present findings; every finding not in the set
    is absent. Instances are immutable and compare by content.
    """
    present: FrozenSet[Finding] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(
            self, "present", frozenset(Finding.parse(f) for f in self.present)
        )

    @classmethod
    def from_findings(cls, findings: Iterable[Union[Finding, str]]) -> "Assessment":
        return cls(frozenset(Finding.parse(f) for f in findings))

    @classmethod
    def from_dict(cls, flags: Mapping[str, Any]) -> "Assessment":
        """Build from a {identifier: bool} mapping; omitted keys are absent."""
        parsed = {Finding.parse(key): bool(value) for key, value in flags.items()}
        return cls(frozenset(f for f, on in parsed.items() if on))

    def is_present(self, finding: Finding) -> bool:
        return finding in self.present

    def active_findings(self) -> List[Finding]:
        """Present findings in canonical order."""
        return [f for f in Finding if f in self.present]

    def toggle(self, finding: Union[Finding, str]) -> "Assessment":
        finding = Finding.parse(finding)
        return Assessment(self.present ^ {finding})

    def as_dict(self) -> Dict[str, bool]:
        return {f.value: f in self.present for f in Finding}


@dataclass(frozen=True)
class BreakdownTerm:
    """One additive term of the linear predictor."""
    name: str
    label: str
    value: float

    def to_dict(self) -> dict:
        return {"name": self.name, "label": self.label, "value": self.value}


@dataclass(frozen=True)
class ScoreResult:
    """Derived scoring output for one assessment."""
    logit: float
    probability: float
    band: RiskBand

    # 95 % cut-off above which LUTO/PBS is strongly suggested
    ALERT_THRESHOLD = 0.95

    @property
    def percentage(self) -> float:
        return self.probability * 100

    @property
    def label(self) -> str:
        return self.band.label

    @property
    def alert(self) -> bool:
        return self.probability >= self.ALERT_THRESHOLD

    def to_dict(self) -> dict:
        return {
            "logit": self.logit,
            "probability": self.probability,
            "percentage": round(self.percentage, 1),
            "band": self.band.value,
            "label": self.label,
            "alert": self.alert,
        }
