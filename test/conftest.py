"""Shared fixtures: a fresh validator per test and a clean process-wide one."""
import json

import pytest

from order_status.config import settings
from order_status.validator import OrderStatusValidator, reset_validator


@pytest.fixture
def validator() -> OrderStatusValidator:
    return OrderStatusValidator()


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    monkeypatch.setattr(settings, "transition_table_path", None)
    monkeypatch.setattr(settings, "allow_same_status", True)
    reset_validator()
    yield
    reset_validator()


@pytest.fixture
def write_table(tmp_path):
    """Write a {status: [next]} mapping to a JSON file and return its path."""
    def _write(mapping, name: str = "transitions.json") -> str:
        path = tmp_path / name
        path.write_text(json.dumps(mapping), encoding="utf-8")
        return str(path)
    return _write
