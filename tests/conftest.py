"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from cinefeed.schemas.feed import Metadata


@pytest.fixture
def metadata_lookup() -> MagicMock:
    """Lookup stub that returns an all-None result for every title."""
    lookup = MagicMock()
    lookup.lookup = AsyncMock(return_value=Metadata())
    return lookup
