from __future__ import annotations

import pytest
from flask import Flask
from flask.testing import FlaskClient

from fincalc.app import create_app
from fincalc.config import Settings


@pytest.fixture()
def app() -> Flask:
    return create_app(Settings(log_level="WARNING"))


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
