"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from cashflow_api.api.main import create_app
from cashflow_api.domain.models import BalancePoint


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_points() -> list[BalancePoint]:
    """90-day projection: salary on the 5th, rent on the 10th, steady daily spend"""
    start = date(2024, 1, 1)
    balance = 3000.0
    points = []

    for day in range(90):
        current = start + timedelta(days=day)
        if current.day == 5:
            balance += 4000.0  # Salary
        if current.day == 10:
            balance -= 1800.0  # Rent
        balance -= 40.0  # Daily spending
        points.append(BalancePoint(date=current.isoformat(), total=balance))

    return points


@pytest.fixture
def make_points():
    """Factory building consecutive daily points from raw totals"""

    def _make(*totals: float, start: date = date(2024, 1, 1)) -> list[BalancePoint]:
        return [
            BalancePoint(date=(start + timedelta(days=i)).isoformat(), total=total)
            for i, total in enumerate(totals)
        ]

    return _make
