# SPDX-License-Identifier: Apache-2.0
"""
Pytest fixtures for the kernel-wire suite.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict

import pytest

from kernel_wire import config as config_module
from kernel_wire import schema_registry
from tests.utils.fixtures import DEFAULT_FILE, PYTHON_SPEC, clone, make_message


@pytest.fixture
def python_spec() -> Dict[str, Any]:
    return clone(PYTHON_SPEC)


@pytest.fixture
def default_file() -> Dict[str, Any]:
    return clone(DEFAULT_FILE)


@pytest.fixture
def message_factory() -> Callable[..., Dict[str, Any]]:
    return make_message


@pytest.fixture
def override_config(monkeypatch) -> Callable[..., config_module.ValidatorConfig]:
    """Swap the global ValidatorConfig for the duration of a test."""

    def _override(**changes: Any) -> config_module.ValidatorConfig:
        new_config = dataclasses.replace(config_module.CONFIG, **changes)
        monkeypatch.setattr(config_module, "CONFIG", new_config)
        return new_config

    return _override


@pytest.fixture
def fresh_schemas():
    """Rebuild JSON Schema documents around a test."""
    schema_registry.clear_cache()
    yield
    schema_registry.clear_cache()
