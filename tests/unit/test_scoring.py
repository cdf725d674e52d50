"""
Unit Tests for the Scoring Layer

Tests for findings, assessments, logit / probability computation
and risk band classification.
"""
import dataclasses
import itertools
import math

import pytest

from luto_nomogram.core.scoring import (
    Assessment,
    DEFAULT_MODEL,
    Finding,
    RiskBand,
    classify_risk,
    compute_logit,
    compute_probability,
    reset,
    toggle,
)
from luto_nomogram.utils import InvalidFindingError


def _all_assessments():
    findings = list(Finding)
    for r in range(len(findings) + 1):
        for combo in itertools.combinations(findings, r):
            yield Assessment.from_findings(combo)


class TestFinding:
    """Tests for the closed finding set."""

    def test_six_findings(self):
        assert [f.value for f in Finding] == [
            "oligohydramnios",
            "bilateralHN",
            "bilateralUreteralDilatation",
            "megacystis",
            "bladderThickening",
            "urinoma",
        ]

    def test_parse_wire_identifier(self):
        assert Finding.parse("bilateralHN") is Finding.BILATERAL_HN
        assert Finding.parse(Finding.URINOMA) is Finding.URINOMA

    def test_parse_unknown_raises(self):
        with pytest.raises(InvalidFindingError) as exc_info:
            Finding.parse("kidneyCysts")

        err = exc_info.value
        assert err.code == "INVALID_FINDING"
        assert err.finding == "kidneyCysts"
        assert len(err.valid_findings) == 6

    def test_labels(self):
        assert Finding.BILATERAL_HN.label == "Bilateral Hydronephrosis"
        assert Finding.BLADDER_THICKENING.label == "Bladder Thickening"


class TestModel:
    """Tests for the published model constants."""

    def test_constants(self):
        assert DEFAULT_MODEL.intercept == -2.7515
        assert DEFAULT_MODEL.coefficient(Finding.MEGACYSTIS) == 3.38305
        assert DEFAULT_MODEL.coefficient(Finding.URINOMA) == 1.7466412

    def test_all_coefficients_positive(self):
        assert all(DEFAULT_MODEL.coefficient(f) > 0 for f in Finding)

    def test_coefficients_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_MODEL.coefficients[Finding.URINOMA] = 0.0

    def test_model_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_MODEL.intercept = 0.0

    def test_citation(self):
        assert DEFAULT_MODEL.citation.year == 2023
        assert str(DEFAULT_MODEL.citation) == (
            "Rickard, Kim, Mieghem et al., Prenatal Diagnosis (2023)"
        )


class TestAssessment:
    """Tests for assessment construction and toggling."""

    def test_default_all_absent(self, empty_assessment):
        flags = empty_assessment.as_dict()
        assert len(flags) == 6
        assert not any(flags.values())

    def test_from_dict_fills_missing_keys(self):
        assessment = Assessment.from_dict({"megacystis": True, "urinoma": False})
        flags = assessment.as_dict()

        assert len(flags) == 6
        assert flags["megacystis"] is True
        assert flags["urinoma"] is False
        assert flags["oligohydramnios"] is False

    def test_from_dict_unknown_key_raises(self):
        with pytest.raises(InvalidFindingError):
            Assessment.from_dict({"megacystis": True, "hydrops": True})

    def test_toggle_sets_finding(self, empty_assessment):
        toggled = toggle(empty_assessment, Finding.MEGACYSTIS)
        assert toggled.is_present(Finding.MEGACYSTIS)
        assert not empty_assessment.is_present(Finding.MEGACYSTIS)

    def test_toggle_accepts_identifier(self, empty_assessment):
        toggled = toggle(empty_assessment, "bladderThickening")
        assert toggled.active_findings() == [Finding.BLADDER_THICKENING]

    def test_toggle_unknown_raises(self, empty_assessment):
        with pytest.raises(InvalidFindingError):
            toggle(empty_assessment, "echogenicKidneys")

    @pytest.mark.parametrize("finding", list(Finding))
    def test_toggle_is_own_inverse(self, oligo_megacystis_assessment, finding):
        a = oligo_megacystis_assessment
        assert toggle(toggle(a, finding), finding) == a

    def test_active_findings_canonical_order(self):
        a = Assessment.from_findings([Finding.URINOMA, Finding.OLIGOHYDRAMNIOS])
        assert a.active_findings() == [Finding.OLIGOHYDRAMNIOS, Finding.URINOMA]

    def test_reset(self, full_assessment):
        fresh = reset()
        assert fresh == Assessment()
        assert compute_logit(fresh) == DEFAULT_MODEL.intercept
        assert full_assessment.as_dict()["urinoma"] is True


class TestLogitAndProbability:
    """Tests for the linear predictor and logistic transform."""

    def test_baseline_logit_exact(self, empty_assessment):
        assert compute_logit(empty_assessment) == -2.7515

    def test_baseline_probability(self, empty_assessment):
        p = compute_probability(compute_logit(empty_assessment))
        assert p == 1 / (1 + math.exp(2.7515))
        assert p == pytest.approx(0.060, abs=1e-3)
        assert classify_risk(p) == RiskBand.LOW

    def test_oligohydramnios_and_megacystis(self, oligo_megacystis_assessment):
        logit = compute_logit(oligo_megacystis_assessment)
        p = compute_probability(logit)

        assert logit == pytest.approx(2.40955)
        assert p == pytest.approx(0.9175, abs=1e-3)
        assert classify_risk(p) == RiskBand.HIGH

    def test_all_findings(self, full_assessment):
        logit = compute_logit(full_assessment)
        p = compute_probability(logit)

        assert logit == pytest.approx(-2.7515 + 14.2599612)
        assert p > 0.9999
        assert p < 1.0
        assert classify_risk(p) == RiskBand.VERY_HIGH

    def test_logit_is_intercept_plus_active_coefficients(self):
        for a in _all_assessments():
            expected = DEFAULT_MODEL.intercept + sum(
                DEFAULT_MODEL.coefficient(f) for f in a.active_findings()
            )
            assert compute_logit(a) == pytest.approx(expected)

    def test_adding_a_finding_increases_probability(self):
        for a in _all_assessments():
            p = compute_probability(compute_logit(a))
            for finding in Finding:
                if a.is_present(finding):
                    continue
                p_more = compute_probability(compute_logit(a.toggle(finding)))
                assert p_more > p

    def test_sigmoid_midpoint(self):
        assert compute_probability(0.0) == 0.5


class TestClassifyRisk:
    """Tests for band thresholds."""

    @pytest.mark.parametrize("probability, band", [
        (0.0, RiskBand.LOW),
        (0.06, RiskBand.LOW),
        (0.1999, RiskBand.LOW),
        (0.20, RiskBand.MODERATE),
        (0.4999, RiskBand.MODERATE),
        (0.50, RiskBand.HIGH),
        (0.9499, RiskBand.HIGH),
        (0.95, RiskBand.VERY_HIGH),
        (1.0, RiskBand.VERY_HIGH),
    ])
    def test_bands(self, probability, band):
        assert classify_risk(probability) == band

    def test_band_labels(self):
        assert RiskBand.VERY_HIGH.label == "Very High Probability"
        assert RiskBand.LOW.label == "Low Probability"
