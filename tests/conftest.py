"""Shared fixtures for podsettings tests."""

from __future__ import annotations

from typing import Any, Callable, Dict

import pytest

from podsettings.models.facts import AggregateTargetFacts


@pytest.fixture
def target_factory() -> Callable[..., AggregateTargetFacts]:
    """Factory for aggregate target facts."""

    def _factory(**overrides: Any) -> AggregateTargetFacts:
        data: Dict[str, Any] = {
            "name": "Pods-App",
            "platform": "ios",
            "sandbox_root": "/project/Pods",
            "client_root": "/project",
        }
        data.update(overrides)
        return AggregateTargetFacts.model_validate(data)

    return _factory
