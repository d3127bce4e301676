" PyTest Config. This contains global-level pytest fixtures. "
import pytest

from tests._utils import FakeSessionize, app_factory


@pytest.fixture(scope="module")
def app():
    """Fixture to provide an instance of the app.
    This will also create a Flask app_context and tear it down.

    This fixture is scoped to the module level, as the conference state is
    immutable and there's nothing to reset between tests.
    """
    yield from app_factory()


@pytest.fixture
def client(app):
    "Yield a test HTTP client for the app"
    yield app.test_client()


@pytest.fixture
def request_context(app):
    "Run the test in an app request context"
    with app.test_request_context("/") as c:
        yield c


@pytest.fixture
def sessionize(monkeypatch):
    "Replace the Sessionize API with canned payloads."
    fake = FakeSessionize()
    monkeypatch.setattr("models.sessionize.requests.get", fake.get)
    yield fake
