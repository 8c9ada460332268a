"""
Tests for health check endpoints.
"""


def test_root_endpoint(client):
    """Test the root endpoint returns welcome message."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "CodeBattle" in data["message"]
    assert "version" in data
    assert "docs" in data
    assert data["api"] == "/api"


def test_health_check(client):
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()

    # Check required fields
    assert data["status"] == "healthy"
    assert "version" in data
    assert "timestamp" in data
    assert data["app_name"] == "CodeBattle"
    assert data["database"] == "connected"


def test_readiness_check(client):
    """Test the readiness check endpoint."""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()

    assert data["ready"] is True
    assert data["checks"]["database"] == "ok"


def test_health_endpoints_cors(client):
    """Test that CORS headers are properly set."""
    response = client.options(
        "/health",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
        }
    )
    assert response.status_code == 200
    assert "access-control-allow-origin" in response.headers


def test_unknown_route_is_a_problem(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.headers["content-type"] == "application/problem+json"
    assert response.json()["title"] == "Not Found"
