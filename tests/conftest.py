from collections.abc import Iterator

import pytest
from flask import Flask

from jws_tokens import get_settings


@pytest.fixture()
def app():
    app = Flask(__name__)
    app.config["TESTING"] = True
    return app


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Re-read settings from the (possibly monkeypatched) environment per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def disable_algorithms(monkeypatch: pytest.MonkeyPatch):
    """
    Factory fixture that disables algorithms through the environment.

    Usage in tests:
        disable_algorithms("RS256", "ES512")
    """

    def _disable(*names: str) -> None:
        monkeypatch.setenv("JWS_DISABLED_ALGORITHMS", ",".join(names))
        get_settings.cache_clear()

    return _disable


@pytest.fixture(scope="session")
def rsa_signer():
    from jws_tokens.backends import RS256

    return RS256.generate()
