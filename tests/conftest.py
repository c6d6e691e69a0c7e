import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.booking_service import BookingService
from app.services.record_store import JsonFileRecordStore


@pytest.fixture
def bookings_file(tmp_path):
    return str(tmp_path / "data" / "bookings.json")


@pytest.fixture
def store(bookings_file):
    store = JsonFileRecordStore(bookings_file)
    store.ensure_ready()
    return store


@pytest.fixture
def service(store):
    return BookingService(store)


@pytest.fixture
def test_settings(tmp_path, bookings_file):
    return Settings(
        BOOKINGS_FILE=bookings_file,
        LOG_DIR=str(tmp_path / "logs"),
        PUBLIC_BASE_URL="http://testserver",
    )


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    # Context manager runs the lifespan (store setup + admin token)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    return {"x-admin-token": client.app.state.admin_token}
