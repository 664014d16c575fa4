"""
HTTP tests against the shipped data/ directory.
"""
import pytest

from app.store import store


class TestServiceMetadata:

    def test_root_descriptor(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Stranger Things API"
        assert body["documentation"]["interactive"] == "/api/docs"
        assert body["endpoints"]["random"]["character"] == "/api/characters/random"

    def test_api_catalogue(self, client):
        body = client.get("/api").json()
        endpoints = [e["endpoint"] for e in body["available_endpoints"]]
        assert "/api/characters" in endpoints
        assert "/api/characters/:id/quotes" in endpoints
        assert body["pagination"]["parameters"]["limit"] == "Items per page (default: 20, max: 50)"

    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "healthy"
        assert body["ready"] is True
        assert body["version"] == "1.0.0"
        assert isinstance(body["uptime"], int)
        assert body["uptime"] >= 0

    def test_stats(self, client):
        body = client.get("/api/stats").json()
        assert body["total_characters"] == 20
        assert body["total_episodes"] == 34
        assert body["seasons"] == {"total": 4, "episodes_per_season": {"1": 8, "2": 9, "3": 8, "4": 9}}
        assert body["characters_by_status"] == {"alive": 14, "deceased": 5, "unknown": 1}

    def test_openapi_schema_is_served(self, client):
        response = client.get("/api/openapi.json")
        assert response.status_code == 200
        assert "/api/{kind}" in response.json()["paths"]


class TestListing:

    def test_default_page(self, client):
        body = client.get("/api/characters").json()
        assert body["count"] == 20
        assert body["pages"] == 1
        assert body["per_page"] == 20
        assert body["next"] is None
        assert body["prev"] is None
        assert len(body["results"]) == 20

    def test_second_page(self, client):
        body = client.get("/api/episodes", params={"page": 2, "limit": 5}).json()
        assert body["current_page"] == 2
        assert body["pages"] == 7
        assert body["next"] == 3
        assert body["prev"] == 1
        assert [e["id"] for e in body["results"]] == [6, 7, 8, 9, 10]

    def test_page_past_the_end_is_empty(self, client):
        body = client.get("/api/quotes", params={"page": 99}).json()
        assert body["results"] == []
        assert body["count"] == 15

    def test_filtering(self, client):
        body = client.get("/api/characters", params={"status": "Deceased"}).json()
        assert body["count"] == 5
        assert {c["name"] for c in body["results"]} == {
            "Barb Holland", "Bob Newby", "Billy Hargrove", "Eddie Munson", "Martin Brenner",
        }

    def test_filtering_list_field(self, client):
        body = client.get("/api/creatures", params={"abilities": "hive mind"}).json()
        assert [c["name"] for c in body["results"]] == ["Demodogs", "Mind Flayer", "The Flayed"]

    def test_filter_then_paginate(self, client):
        body = client.get("/api/episodes", params={"season": 4, "limit": 4, "page": 3}).json()
        assert body["count"] == 9
        assert body["pages"] == 3
        assert body["next"] is None
        assert [e["episode"] for e in body["results"]] == [9]

    @pytest.mark.parametrize("params,message", [
        ({"page": "0"}, "Invalid page parameter. Must be a positive integer."),
        ({"page": "abc"}, "Invalid page parameter. Must be a positive integer."),
        ({"limit": "0"}, "Invalid limit parameter. Must be between 1 and 50."),
        ({"limit": "51"}, "Invalid limit parameter. Must be between 1 and 50."),
    ])
    def test_invalid_pagination(self, client, params, message):
        response = client.get("/api/locations", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": "Bad Request", "message": message, "code": 400}


class TestLookups:

    def test_record_by_id(self, client):
        body = client.get("/api/characters/1").json()
        assert body["name"] == "Eleven"

    @pytest.mark.parametrize("path,label", [
        ("/api/characters/999", "Character"),
        ("/api/creatures/999", "Creature"),
        ("/api/episodes/999", "Episode"),
        ("/api/locations/999", "Location"),
        ("/api/quotes/999", "Quote"),
    ])
    def test_missing_record(self, client, path, label):
        response = client.get(path)
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "message": f"{label} not found", "code": 404}

    @pytest.mark.parametrize("record_id", ["0", "-3", "abc"])
    def test_invalid_id(self, client, record_id):
        response = client.get(f"/api/episodes/{record_id}")
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid ID parameter. Must be a positive integer."

    def test_random_record(self, client):
        for _ in range(5):
            response = client.get("/api/episodes/random")
            assert response.status_code == 200
            assert 1 <= response.json()["id"] <= 34

    def test_random_from_empty_collection(self, client):
        store.replace_collection("creatures", ())
        response = client.get("/api/creatures/random")
        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal Server Error",
            "message": "Cannot pick a random record from an empty collection",
            "code": 500,
        }

    def test_character_quotes(self, client):
        body = client.get("/api/characters/1/quotes").json()
        assert body["character"] == "Eleven"
        assert body["quote_count"] == 3
        assert [q["id"] for q in body["quotes"]] == [1, 4, 6]

    def test_quotes_of_missing_character(self, client):
        response = client.get("/api/characters/999/quotes")
        assert response.status_code == 404
        assert response.json()["message"] == "Character not found"

    def test_season_episodes(self, client):
        body = client.get("/api/seasons/2/episodes").json()
        assert body["season"] == 2
        assert body["episode_count"] == 9
        assert body["episodes"][0]["title"] == "Chapter One: MADMAX"

    @pytest.mark.parametrize("season", ["0", "5", "two"])
    def test_invalid_season(self, client, season):
        response = client.get(f"/api/seasons/{season}/episodes")
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid season parameter. Must be between 1 and 4."


class TestSearchEndpoint:

    def test_search_all(self, client):
        body = client.get("/api/search", params={"q": "hawkins"}).json()
        assert body["type"] == "all"
        assert body["results_per_category"] == 5
        assert [hit["id"] for hit in body["results"]["locations"]] == [1, 2, 3, 6]
        assert body["total_results"] >= 4

    def test_search_single_type(self, client):
        body = client.get("/api/search", params={"q": "upside", "type": "creatures"}).json()
        assert list(body["results"]) == ["creatures"]
        assert all(hit["type"] == "creature" for hit in body["results"]["creatures"])

    def test_limit_is_capped_at_twenty(self, client):
        body = client.get("/api/search", params={"q": "chapter", "type": "episodes", "limit": 50}).json()
        assert body["results_per_category"] == 20
        assert len(body["results"]["episodes"]) == 20

    def test_query_too_short(self, client):
        response = client.get("/api/search", params={"q": "a"})
        assert response.status_code == 400
        assert response.json()["message"] == "Search query must be at least 2 characters"

    def test_missing_query(self, client):
        assert client.get("/api/search").status_code == 400

    def test_unknown_type_returns_no_results(self, client):
        response = client.get("/api/search", params={"q": "eleven", "type": "villains"})
        assert response.status_code == 200
        body = response.json()
        assert body["type"] == "villains"
        assert body["results"] == {}
        assert body["total_results"] == 0

    def test_limit_out_of_range(self, client):
        response = client.get("/api/search", params={"q": "eleven", "limit": 51})
        assert response.status_code == 400


class TestUnknownEndpoints:

    @pytest.mark.parametrize("path", ["/api/villains", "/api/villains/1", "/nowhere"])
    def test_not_found_envelope(self, client, path):
        response = client.get(path)
        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Not Found"
        assert body["message"] == "The requested endpoint does not exist."
        assert body["documentation"] == "/api/docs"
        assert "/api/characters" in body["available_endpoints"]

    def test_method_not_allowed(self, client):
        response = client.post("/api/characters")
        assert response.status_code == 405
        assert response.json()["error"] == "Method Not Allowed"
