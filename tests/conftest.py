import pytest
from solar_engine.types import YearlyProjection


@pytest.fixture
def flat_projections():
    """3 jaar met vaste besparing van 5000."""
    return [YearlyProjection(year=i, savings=5000.0) for i in range(1, 4)]

