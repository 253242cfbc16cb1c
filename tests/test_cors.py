import pytest


@pytest.fixture()
def allowed_origin(app_settings):
    return app_settings.CORS_ALLOWED_ORIGINS[0]


def preflight(client, origin, method="POST"):
    return client.options(
        "/students",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": method,
            "Access-Control-Request-Headers": "Content-Type",
        },
    )


def test_preflight_from_allowed_origin(client, allowed_origin):
    response = preflight(client, allowed_origin)

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == allowed_origin
    assert response.headers["access-control-allow-credentials"] == "true"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_preflight_from_unknown_origin(client):
    response = preflight(client, "http://evil.example.com")

    assert "access-control-allow-origin" not in response.headers


def test_simple_request_exposes_content_length(client, allowed_origin):
    response = client.get("/students", headers={"Origin": allowed_origin})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == allowed_origin
    assert response.headers["access-control-allow-credentials"] == "true"
    assert "Content-Length" in response.headers["access-control-expose-headers"]


def test_simple_request_from_unknown_origin(client):
    response = client.get("/students", headers={"Origin": "http://evil.example.com"})

    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers
