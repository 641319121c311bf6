from __future__ import annotations

import pytest

from assetroots.resolver import AssetResolver
from tests._fixtures.build_graph import GraphBuilder


@pytest.fixture
def graph() -> GraphBuilder:
    """Provide a fresh builder for contributing targets."""
    return GraphBuilder()


@pytest.fixture
def resolver() -> AssetResolver:
    return AssetResolver()
