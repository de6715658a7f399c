from __future__ import annotations

import pytest

from sanitydb.config import ResilienceConfig, RetryPolicy, SanityOptions
from sanitydb.context import DataContext
from tests.helpers.documents import FakeRemoteClient


@pytest.fixture
def sanity_options() -> SanityOptions:
    return SanityOptions(
        project_id="abc123",
        dataset="production",
        token="secret-token",
        resilience=ResilienceConfig(name="sanity-test", retry=RetryPolicy(total=0)),
    )


@pytest.fixture
def fake_client() -> FakeRemoteClient:
    return FakeRemoteClient()


@pytest.fixture
def context(sanity_options: SanityOptions, fake_client: FakeRemoteClient) -> DataContext:
    return DataContext(sanity_options, client=fake_client)
