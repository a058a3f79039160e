from __future__ import annotations

from datetime import UTC, datetime

import pytest

from legacy_processor.domain.reconciliation import ReconciliationEngine
from legacy_processor.domain.translator import PayloadTranslator
from tests.support.challenges import (
    DEFAULTS,
    UPDATE_TOPIC,
    FakeCanonical,
    FakeLegacyGateway,
    FakeLookup,
    FakePublisher,
    render_paragraph,
)

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def lookup() -> FakeLookup:
    return FakeLookup()


@pytest.fixture
def translator(lookup: FakeLookup) -> PayloadTranslator:
    return PayloadTranslator(
        lookup=lookup,
        render=render_paragraph,
        defaults=DEFAULTS,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def legacy_gateway() -> FakeLegacyGateway:
    return FakeLegacyGateway()


@pytest.fixture
def canonical() -> FakeCanonical:
    return FakeCanonical()


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def engine(
    translator: PayloadTranslator,
    legacy_gateway: FakeLegacyGateway,
    canonical: FakeCanonical,
    publisher: FakePublisher,
) -> ReconciliationEngine:
    return ReconciliationEngine(
        translator=translator,
        legacy=legacy_gateway,
        canonical=canonical,
        publisher=publisher,
        update_topic=UPDATE_TOPIC,
        defaults=DEFAULTS,
    )
