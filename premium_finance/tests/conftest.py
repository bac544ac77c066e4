from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from premium_finance.app import create_app
from premium_finance.schemas.projection import SimulationInput


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app({"TESTING": True})
    with app.test_client() as test_client:
        yield test_client


def _proposal_payload(**overrides) -> dict:
    payload = {
        "budget": 1_000_000,
        "cashReserve": 200_000,
        "bondAlloc": 300_000,
        "bondYield": 4.5,
        "hibor": 4.15,
        "spread": 1.30,
        "capRate": 9.00,
        "leverageLTV": 90,
        "handlingFee": 1.0,
        "fundSource": "cash",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def proposal() -> SimulationInput:
    return SimulationInput.model_validate(_proposal_payload())


@pytest.fixture()
def mortgage_proposal() -> SimulationInput:
    return SimulationInput.model_validate(
        _proposal_payload(
            budget=3_000_000,
            cashReserve=300_000,
            bondAlloc=700_000,
            fundSource="mortgage",
            unlockedCash=3_000_000,
            effectiveMortgageRate=4.125,
            mortgageTenor=20,
        )
    )


@pytest.fixture()
def proposal_payload():
    """Builder for the reference proposal body; keyword overrides replace fields."""
    return _proposal_payload
