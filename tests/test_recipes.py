"""Tests for the HTTP endpoints."""

from fastapi.testclient import TestClient

from app.api.routes.recipes import build_wizard
from app.models.wizard import GenerateRecipeRequest
from app.services.appliance_store import DEFAULT_APPLIANCES
from app.utils.exceptions import UpstreamTimeout, UpstreamUnavailable


def _body(**overrides) -> dict:
    body = {
        "ingredients": "chicken, lemon",
        "mealType": "dinner",
        "dietaryCategory": "meat",
        "servings": 4,
        "appliances": ["Oven", "Stovetop"],
    }
    body.update(overrides)
    return body


def test_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_readiness_check(client: TestClient):
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert "status" in data
    assert "dependencies" in data


def test_generate_recipe(client: TestClient, fake_gemini):
    response = client.post("/recipes/generate", json=_body(cuisineStyle="Mediterranean"))

    assert response.status_code == 200
    data = response.json()
    assert data["recipe"]["name"] == "Lemon Chicken"
    assert data["recipe"]["steps"][0]["number"] == 1
    assert data["unlistedAppliances"] == []
    assert "X-Request-ID" in response.headers

    system_text, user_text = fake_gemini.calls[0]
    assert "FLEISHIG" in system_text
    assert "Create a Mediterranean dinner recipe for 4 servings." in user_text


def test_generate_flags_unlisted_appliance(client: TestClient):
    response = client.post("/recipes/generate", json=_body(appliances=["Oven"]))
    assert response.status_code == 200
    assert response.json()["unlistedAppliances"] == ["Stovetop"]


def test_generate_without_appliances(client: TestClient, fake_gemini):
    response = client.post("/recipes/generate", json=_body(appliances=[]))

    assert response.status_code == 400
    assert response.json()["reason"] == "no_appliances_configured"
    assert fake_gemini.calls == []


def test_generate_missing_answer(client: TestClient, fake_gemini):
    response = client.post("/recipes/generate", json=_body(ingredients="   "))

    assert response.status_code == 422
    data = response.json()
    assert data["reason"] == "invalid_input"
    assert "ingredients" in data["detail"]
    assert fake_gemini.calls == []


def test_generate_unknown_meal_type(client: TestClient):
    response = client.post("/recipes/generate", json=_body(mealType="brunch"))
    assert response.status_code == 422
    assert "mealType" in response.json()["detail"]


def test_generate_non_positive_servings(client: TestClient):
    response = client.post("/recipes/generate", json=_body(servings=0))
    assert response.status_code == 422
    assert "servings" in response.json()["detail"]


def test_generate_malformed_model_output(client: TestClient, fake_gemini):
    fake_gemini.text = "Sorry, I cannot help with that."

    response = client.post("/recipes/generate", json=_body())

    assert response.status_code == 502
    data = response.json()
    assert data["reason"] == "malformed_response"
    assert data["error"] == "Failed to parse recipe. Please try again."
    assert "recipe" not in data


def test_generate_upstream_failure(client: TestClient, fake_gemini):
    fake_gemini.error = UpstreamUnavailable("Failed to generate recipe: 401 API key invalid")

    response = client.post("/recipes/generate", json=_body())

    assert response.status_code == 502
    assert response.json()["reason"] == "upstream_unavailable"
    assert "401 API key invalid" in response.json()["detail"]


def test_generate_upstream_timeout(client: TestClient, fake_gemini):
    fake_gemini.error = UpstreamTimeout(90)

    response = client.post("/recipes/generate", json=_body())

    assert response.status_code == 504
    assert response.json()["reason"] == "upstream_timeout"


def test_recipe_options(client: TestClient):
    data = client.get("/recipes/options").json()

    assert data["mealTypes"] == ["breakfast", "lunch", "dinner", "appetizer", "dessert", "snack"]
    assert [c["value"] for c in data["dietaryCategories"]] == ["meat", "dairy", "pareve"]
    assert data["servings"] == {"min": 1, "max": 50}
    assert data["steps"][-1] == "confirm"


def test_default_appliances(client: TestClient):
    data = client.get("/appliances/defaults").json()

    assert len(data["appliances"]) == len(DEFAULT_APPLIANCES)
    assert data["ownedAppliances"] == ["Stovetop / Gas or Electric Range", "Oven", "Microwave"]
    assert data["categories"][0] == "Cooking Surfaces"


def test_merge_appliances_appends_new_defaults(client: TestClient):
    stored = '[{"id": "oven", "name": "Oven", "category": "Cooking Surfaces", "owned": false},' \
             ' {"id": "custom-1", "name": "Smoker", "category": "Other", "owned": true}]'

    data = client.post("/appliances/merge", json={"stored": stored}).json()

    ids = [a["id"] for a in data["appliances"]]
    assert ids[:2] == ["oven", "custom-1"]
    assert len(ids) == len(DEFAULT_APPLIANCES) + 1
    assert data["appliances"][0]["owned"] is False
    assert "Oven" not in data["ownedAppliances"]
    assert "Smoker" in data["ownedAppliances"]


def test_merge_appliances_with_corrupt_data(client: TestClient):
    data = client.post("/appliances/merge", json={"stored": "not json"}).json()
    assert [a["id"] for a in data["appliances"]] == [a.id for a in DEFAULT_APPLIANCES]


def test_merge_appliances_with_nothing_stored(client: TestClient):
    response = client.post("/appliances/merge", json={"stored": None})
    assert response.status_code == 200
    assert len(response.json()["appliances"]) == len(DEFAULT_APPLIANCES)


def test_build_wizard_submits_once_and_marks_busy():
    wizard = build_wizard(GenerateRecipeRequest(**_body()))

    submission = wizard.submit()
    assert submission.owned_appliances == ["Oven", "Stovetop"]
    assert submission.answers.servings == 4
    assert wizard.busy is True
    assert wizard.submit() is None


def test_build_wizard_with_missing_answer_does_not_submit():
    wizard = build_wizard(GenerateRecipeRequest(**_body(mealType=None)))

    assert wizard.submit() is None
    assert wizard.busy is False
