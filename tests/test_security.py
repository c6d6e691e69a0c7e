import re

from app.core.security import generate_admin_token, build_admin_url


def test_generated_tokens_are_random_hex():
    first = generate_admin_token()
    second = generate_admin_token()

    assert re.fullmatch(r"[0-9a-f]{32}", first)
    assert first != second


def test_build_admin_url():
    assert build_admin_url("https://example.co.uk/", "/admin", "abc") == "https://example.co.uk/admin?token=abc"
    assert build_admin_url("http://localhost:8000", "admin", "abc") == "http://localhost:8000/admin?token=abc"


def test_admin_routes_reject_bad_tokens(client):
    token = client.app.state.admin_token
    requests = [
        ("get", "/api/admin/bookings"),
        ("get", "/api/admin/stats"),
        ("patch", "/api/admin/bookings/any"),
        ("delete", "/api/admin/bookings/any"),
    ]
    bad_auth = [
        {},
        {"headers": {"x-admin-token": ""}},
        {"params": {"token": ""}},
        {"headers": {"x-admin-token": "x" + token[1:]}},
        {"params": {"token": token[:-1]}},
        {"params": {"token": token + "0"}},
    ]

    for method, url in requests:
        for auth in bad_auth:
            kwargs = dict(auth)
            if method == "patch":
                kwargs["json"] = {"status": "confirmed"}
            response = getattr(client, method)(url, **kwargs)
            assert response.status_code == 401, (method, url, auth)
            assert response.json() == {"detail": "Unauthorized"}


def test_token_accepted_from_query_or_header(client):
    token = client.app.state.admin_token

    assert client.get("/api/admin/bookings", params={"token": token}).status_code == 200
    assert client.get("/api/admin/bookings", headers={"x-admin-token": token}).status_code == 200


def test_token_changes_between_app_starts(test_settings):
    from fastapi.testclient import TestClient
    from app.main import create_app

    app = create_app(test_settings)
    with TestClient(app) as client:
        old_token = client.app.state.admin_token
    with TestClient(app) as client:
        new_token = client.app.state.admin_token
        assert old_token != new_token
        assert client.get("/api/admin/bookings", params={"token": old_token}).status_code == 401
