"""Pytest configuration and shared fixtures for DebtSage tests.

Provides an isolated SQLite database per test, repository/service wiring and
debt factories so domain logic can be exercised without the real app database.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from debtsage.infra.database import create_session_factory
from debtsage.infra.repositories import SQLModelDebtPaymentRepository, SQLModelDebtRepository
from debtsage.models import Debt, DebtPayment  # noqa: F401  # register tables
from debtsage.services.amortization import DebtRecord
from debtsage.services.debt_service import DebtService

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what the repositories expect."""
    return create_session_factory(db_engine)


@pytest.fixture
def debt_repo(session_factory):
    return SQLModelDebtRepository(session_factory)


@pytest.fixture
def payment_repo(session_factory):
    return SQLModelDebtPaymentRepository(session_factory)


@pytest.fixture
def debt_service(debt_repo, payment_repo):
    """DebtService wired to the per-test database."""
    return DebtService(debt_repo, payment_repo)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory(db_session):
    """Factory for creating persisted debts.

    Returns:
        Callable: Function that creates and persists Debt instances
    """

    def _create_debt(
        name: str = "Test Debt",
        remaining_amount: float = 1000.00,
        monthly_payment: float = 100.00,
        interest_rate: float = 12.0,
        remaining_months: int = 12,
        category: str = "loan",
        is_active: bool = True,
    ) -> Debt:
        """Create a test debt with sensible defaults.

        Args:
            name: Debt name/description
            remaining_amount: Current outstanding balance
            monthly_payment: Fixed monthly payment including interest
            interest_rate: Annual percentage rate (e.g., 12.0 for 12%)
            remaining_months: Months left to pay
            category: One of the debt categories
            is_active: Whether the debt is still being repaid

        Returns:
            Debt: Persisted debt instance
        """
        debt = Debt(
            name=name,
            category=category,
            total_amount=remaining_amount,
            remaining_amount=remaining_amount,
            monthly_payment=monthly_payment,
            interest_rate=interest_rate,
            total_months=remaining_months,
            remaining_months=remaining_months,
            is_active=is_active,
        )
        db_session.add(debt)
        db_session.commit()
        db_session.refresh(debt)
        return debt

    return _create_debt


def make_record(
    remaining_amount: float = 1000.00,
    monthly_payment: float = 100.00,
    interest_rate: float = 12.0,
    remaining_months: int = 12,
    **kwargs,
) -> DebtRecord:
    """Build an engine record with sensible defaults."""
    return DebtRecord(
        id=kwargs.pop("id", 1),
        remaining_amount=remaining_amount,
        monthly_payment=monthly_payment,
        interest_rate=interest_rate,
        remaining_months=remaining_months,
        **kwargs,
    )


# =============================================================================
# Assertion Helpers
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
