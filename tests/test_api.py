import pytest
from fastapi.testclient import TestClient

from journal import api
from tools import recipe_extraction
from utils.recipes_repo import delete_recipe, list_recipes
from utils.supabase_utils import SUPABASE_KEY_NAMES, SUPABASE_URL_NAMES, get_supabase_client


@pytest.fixture
def client(supabase):
    api.app.dependency_overrides[api.get_supabase] = lambda: (lambda: supabase)
    yield TestClient(api.app)
    api.app.dependency_overrides.clear()


@pytest.fixture
def fake_model(monkeypatch, sample_recipe):
    monkeypatch.setattr(recipe_extraction, "process_recipe", lambda images: sample_recipe)


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["ok"] is True


@pytest.mark.parametrize("body", ({"images": [], "userId": "owner-1"}, {"userId": "owner-1"}))
def test_digitize_rejects_empty_image_list(client, supabase, body):
    res = client.post("/api/digitize", json=body)

    assert res.status_code == 400
    assert res.json() == {"error": "No images provided"}
    assert list_recipes(supabase) == []


def test_digitize_saves_a_listable_recipe(client, supabase, fake_model, sample_recipe):
    res = client.post(
        "/api/digitize",
        json={"images": ["data:image/jpeg;base64,AAA", "data:image/jpeg;base64,BBB"], "userId": "owner-1"},
    )

    assert res.status_code == 200
    assert res.json() == {"success": True, "recipe": sample_recipe}
    listed = list_recipes(supabase, user_id="owner-1")
    assert len(listed) == 1
    assert listed[0]["title"] == sample_recipe["title"]

    delete_recipe(supabase, listed[0]["id"])
    assert list_recipes(supabase, user_id="owner-1") == []


def test_digitize_reports_model_failure_as_500(client, supabase, monkeypatch):
    def broken(images):
        raise RuntimeError("No content returned from AI")

    monkeypatch.setattr(recipe_extraction, "process_recipe", broken)

    res = client.post("/api/digitize", json={"images": ["AAA"], "userId": "owner-1"})

    assert res.status_code == 500
    assert res.json() == {"error": "No content returned from AI"}
    assert list_recipes(supabase) == []


def test_digitize_reports_storage_failure_as_500(client, supabase, fake_model):
    supabase.fail_inserts = True

    res = client.post("/api/digitize", json={"images": ["AAA"], "userId": "owner-1"})

    assert res.status_code == 500
    assert res.json() == {"error": "Failed to save to database"}


@pytest.fixture
def unconfigured_client(monkeypatch):
    for name in SUPABASE_URL_NAMES + SUPABASE_KEY_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_supabase_client.clear()
    api.app.dependency_overrides.clear()
    yield TestClient(api.app, raise_server_exceptions=False)
    get_supabase_client.clear()


def test_empty_images_rejected_even_without_database_config(unconfigured_client):
    res = unconfigured_client.post("/api/digitize", json={"images": []})

    assert res.status_code == 400
    assert res.json() == {"error": "No images provided"}


def test_missing_database_config_is_a_json_error(unconfigured_client, fake_model):
    res = unconfigured_client.post("/api/digitize", json={"images": ["AAA"], "userId": "owner-1"})

    assert res.status_code == 500
    assert res.headers["content-type"].startswith("application/json")
    assert "Missing required secrets" in res.json()["error"]
