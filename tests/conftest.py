"""Pytest fixtures for intake, coordinator and API tests."""

import pytest

from src.integrations.clients.mocks.identity import IdentityMockClient
from src.integrations.clients.mocks.monday import MondayMockClient
from src.integrations.clients.mocks.resend import ResendMockClient
from src.integrations.contracts.interfaces import ContactSubmission


def _make_submission(**overrides) -> ContactSubmission:
    data = dict(
        full_name="Jane Q Public",
        email="jane@example.com",
        area_of_expertise=[1, 2],
        labels=[3],
        segment_ids=["seg_newsletter", "seg_events", "seg_partners"],
        employer="Acme",
        role="CTO",
        linkedin="https://linkedin.com/in/jane",
        location="Berlin",
        notes="Met at the conference",
    )
    data.update(overrides)
    return ContactSubmission(**data)


@pytest.fixture
def make_submission():
    return _make_submission


@pytest.fixture
def submission():
    return _make_submission()


@pytest.fixture
def board():
    return MondayMockClient()


@pytest.fixture
def messaging():
    return ResendMockClient()


@pytest.fixture
def identity():
    return IdentityMockClient()
