"""
Pytest Configuration and Fixtures

Shared fixtures for nomogram tests.
"""
import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from luto_nomogram.core.scoring import Assessment, Finding, NomogramEngine


@pytest.fixture
def engine() -> NomogramEngine:
    """Engine bound to the published model."""
    return NomogramEngine()


@pytest.fixture
def empty_assessment() -> Assessment:
    """No findings present."""
    return Assessment()


@pytest.fixture
def oligo_megacystis_assessment() -> Assessment:
    """Oligohydramnios plus megacystis, the classic LUTO presentation."""
    return Assessment.from_findings([Finding.OLIGOHYDRAMNIOS, Finding.MEGACYSTIS])


@pytest.fixture
def full_assessment() -> Assessment:
    """Every finding present."""
    return Assessment.from_findings(list(Finding))
