from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from compound_calc import create_app
from compound_calc.config import Settings
from compound_calc.core.history import HistoryStore


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        HISTORY_DB_PATH=tmp_path / "data" / "history.db",
        EXPORT_DIR=tmp_path / "exports",
    )


@pytest.fixture()
def app(settings: Settings) -> Flask:
    return create_app(settings)


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def store(tmp_path) -> HistoryStore:
    return HistoryStore(tmp_path / "history.db")

