"""HTTP tests for the FastAPI routes."""

import json

from fastapi.testclient import TestClient

from app.main import app, get_service
from discovery.core.rate_limiter import RateLimiter
from discovery.errors import QuotaExceeded, TransportError
from discovery.service import DiscoveryService
from tests.conftest import RECOMMENDATIONS, ScriptedGenerator, fenced


def _client_for(generator, limiter=None):
    service = DiscoveryService(generator, limiter or RateLimiter())
    app.dependency_overrides[get_service] = lambda: service
    return TestClient(app)


def teardown_function():
    app.dependency_overrides.clear()


def test_recommend_post(client, generator):
    response = client.post("/api/recommend", json={"userPrompt": "transcribe podcasts"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["query"] == "transcribe podcasts"
    assert body["recommendations"] == RECOMMENDATIONS["recommendations"]
    assert body["metadata"]["totalRecommendations"] == 2
    assert body["metadata"]["aiPowered"] is True
    assert body["metadata"]["timestamp"].endswith("Z")
    assert isinstance(body["metadata"]["processingTimeMs"], int)


def test_recommend_get(client, generator):
    response = client.get("/api/recommend", params={"userPrompt": "write blog posts"})
    assert response.status_code == 200
    assert 'Based on this user request: "write blog posts"' in generator.prompts[0]


def test_recommend_requires_prompt(client, generator):
    response = client.post("/api/recommend", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "User prompt is required"}
    assert generator.prompts == []


def test_recommend_invalid_shape():
    client = _client_for(ScriptedGenerator(fenced({"foo": 1})))
    response = client.post("/api/recommend", json={"userPrompt": "x"})
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to discover AI tools"
    assert "recommendations" in body["details"]
    assert body["suggestion"]


def test_method_not_allowed(client):
    assert client.delete("/api/recommend").status_code == 405
    assert client.get("/api/compare").status_code == 405


def test_search_post_with_filters(client, generator):
    response = client.post(
        "/api/search",
        json={"query": "video editing", "filters": {"budget": "free", "techLevel": "beginner"}},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["query"] == "video editing"
    assert body["filters"] == {"budget": "free", "techLevel": "beginner"}
    assert len(body["recommendations"]) == 2
    assert "timestamp" in body
    assert "Budget: free Technical Level: beginner" in generator.prompts[0]


def test_search_get_parses_filters(client, generator):
    response = client.get(
        "/api/search",
        params={"query": "chatbots", "filters": json.dumps({"category": "Conversational"})},
    )
    assert response.status_code == 200
    assert response.json()["filters"] == {"category": "Conversational"}


def test_search_get_rejects_bad_filters(client, generator):
    response = client.get("/api/search", params={"query": "chatbots", "filters": "{not json"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid filters"
    assert generator.prompts == []


def test_search_requires_query(client):
    response = client.post("/api/search", json={"filters": {"budget": "free"}})
    assert response.status_code == 400
    assert response.json() == {"error": "Search query is required"}


def test_tool_details():
    client = _client_for(ScriptedGenerator('```json\n{"name": "ElevenLabs"}\n```'))
    response = client.get("/api/tools/ElevenLabs")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["tool"] == {"name": "ElevenLabs"}


def test_category():
    client = _client_for(ScriptedGenerator(fenced({"category": "Audio", "tools": []})))
    response = client.get("/api/category/Audio")
    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "Audio"
    assert body["tools"] == []


def test_insights_malformed_response():
    client = _client_for(ScriptedGenerator("no json here"))
    response = client.get("/api/insights")
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to get industry insights"
    assert body["details"] == "No JSON object found in the AI response"


def test_insights_success():
    client = _client_for(ScriptedGenerator(fenced({"marketOverview": {"totalTools": "10000"}})))
    response = client.get("/api/insights")
    assert response.status_code == 200
    assert response.json()["insights"]["marketOverview"]["totalTools"] == "10000"


def test_compare_success():
    generator = ScriptedGenerator(fenced({"summary": "Both are good"}))
    client = _client_for(generator)
    response = client.post("/api/compare", json={"tools": ["Claude", "Gemini"]})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["summary"] == "Both are good"


def test_compare_rejects_single_tool():
    generator = ScriptedGenerator(fenced({"summary": "x"}))
    client = _client_for(generator)
    response = client.post("/api/compare", json={"tools": ["Claude"]})
    assert response.status_code == 400
    assert response.json() == {"error": "At least 2 tools required for comparison"}
    assert generator.prompts == []


def test_local_rate_limit_maps_to_too_many_requests():
    client = _client_for(ScriptedGenerator(fenced({"name": "x"})), RateLimiter(max_requests=1))
    assert client.get("/api/tools/x").status_code == 200
    response = client.get("/api/tools/x")
    assert response.status_code == 429
    assert response.json()["error"] == "Too many requests"


def test_upstream_quota_maps_to_guidance():
    client = _client_for(ScriptedGenerator(QuotaExceeded("429 Too Many Requests", status_code=429)))
    response = client.get("/api/insights")
    assert response.status_code == 503
    body = response.json()
    assert body["error"] == "AI service quota exceeded"
    assert body["details"] == "429 Too Many Requests"
    assert body["suggestion"]


def test_transport_error():
    client = _client_for(ScriptedGenerator(TransportError("connection reset", status_code=None)))
    response = client.get("/api/category/Video")
    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to discover category tools",
        "details": "connection reset",
    }


def test_endpoints_and_health(client):
    response = client.get("/api/endpoints")
    assert response.status_code == 200
    assert "POST /api/compare" in response.json()["endpoints"]

    health = client.get("/api/health").json()
    assert health["status"] == "ok"


def test_cors_preflight(client):
    response = client.options(
        "/api/compare",
        headers={
            "Origin": "https://frontend.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert "POST" in response.headers["access-control-allow-methods"]


def test_compare_rejects_non_list_tools():
    generator = ScriptedGenerator(fenced({"summary": "x"}))
    client = _client_for(generator)
    response = client.post("/api/compare", json={"tools": "Claude"})
    assert response.status_code == 400
    assert response.json() == {"error": "At least 2 tools required for comparison"}
    assert generator.prompts == []


def test_malformed_json_body_uses_error_envelope(client, generator):
    response = client.post(
        "/api/recommend",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request"
    assert body["details"]
    assert "detail" not in body
    assert generator.prompts == []


def test_wrongly_typed_field_uses_error_envelope(client, generator):
    response = client.post("/api/search", json={"query": "x", "filters": ["budget"]})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert generator.prompts == []


def test_search_post_numeric_and_extra_filters(client, generator):
    filters = {"budget": 50, "techLevel": "advanced", "region": "EU"}
    response = client.post("/api/search", json={"query": "x", "filters": filters})
    assert response.status_code == 200
    assert response.json()["filters"] == filters
    assert 'related to: "x" Budget: 50 Technical Level: advanced' in generator.prompts[0]


def test_search_get_numeric_filter(client, generator):
    response = client.get("/api/search", params={"query": "x", "filters": json.dumps({"budget": 50})})
    assert response.status_code == 200
    assert response.json()["filters"] == {"budget": 50}
    assert "Budget: 50" in generator.prompts[0]


def test_search_get_null_filters(client, generator):
    response = client.get("/api/search", params={"query": "x", "filters": "null"})
    assert response.status_code == 200
    assert response.json()["filters"] is None


def test_search_get_rejects_non_object_filters(client, generator):
    response = client.get("/api/search", params={"query": "x", "filters": "[1, 2]"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid filters", "details": "filters must be a JSON object"}
    assert generator.prompts == []
