from __future__ import annotations

import pytest

from apipages.tree import ApiModel
from tests._fixtures.model_builder import build_sample_model


@pytest.fixture
def sample_model() -> ApiModel:
    """Provide a fresh copy of the two-package sample model."""
    return build_sample_model()
