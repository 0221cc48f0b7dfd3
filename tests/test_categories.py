"""
Tests for the category console endpoints.
"""
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.core.database import Base
from app.core.labels import get_label
from app.services.category_store import CategoryStore
from app.services.category_validator import ORDER_MAX


class TestAddCategoryEndpoint:
    """POST /console/category/ renders {sc, oId, msg}."""

    def test_add_category(self, client: TestClient, test_category_data):
        response = client.post("/console/category/", json=test_category_data)
        assert response.status_code == 200
        data = response.json()
        assert data["sc"] is True
        assert data["msg"] == get_label("addSuccLabel")
        assert data["oId"]

        detail = client.get(f"/console/category/{data['oId']}").json()
        assert detail["sc"] is True
        assert detail["category"] == {
            "oId": data["oId"],
            "categoryTitle": "Python",
            "categoryURI": "/python",
            "categoryDescription": "Notes about Python",
            "categoryOrder": 3,
        }

    def test_add_category_with_defaults(self, client: TestClient):
        data = client.post("/console/category/", json={}).json()
        assert data["sc"] is True

        category = client.get(f"/console/category/{data['oId']}").json()["category"]
        assert category["categoryTitle"] == "Category"
        assert category["categoryURI"] == "/Category"
        assert category["categoryDescription"] == ""
        assert category["categoryOrder"] == 10

    def test_order_as_string(self, client: TestClient):
        data = client.post("/console/category/", json={"categoryURI": "/s", "categoryOrder": "7"}).json()
        category = client.get(f"/console/category/{data['oId']}").json()["category"]
        assert category["categoryOrder"] == 7

    def test_add_duplicate_uri(self, client: TestClient, test_category_data):
        client.post("/console/category/", json=test_category_data)
        response = client.post("/console/category/", json=test_category_data)

        assert response.status_code == 200
        data = response.json()
        assert data == {"sc": False, "msg": data["msg"]}
        assert "/python" in data["msg"]

        categories = client.get("/console/categories").json()["categories"]
        assert len(categories) == 1

    def test_out_of_range_order_falls_back_to_default(self, client: TestClient):
        data = client.post("/console/category/", json={"categoryURI": "/big", "categoryOrder": 2 ** 63}).json()
        assert data["sc"] is True

        category = client.get(f"/console/category/{data['oId']}").json()["category"]
        assert category["categoryOrder"] == 10

    def test_default_order_exhausted(self, client: TestClient):
        client.post("/console/category/", json={"categoryURI": "/last", "categoryOrder": ORDER_MAX})
        data = client.post("/console/category/", json={"categoryURI": "/next"}).json()
        assert data == {"sc": False, "msg": get_label("categoryOrderExhaustedLabel")}

    def test_body_must_be_an_object(self, client: TestClient):
        response = client.post("/console/category/", json=["not", "an", "object"])
        assert response.status_code == 400
        assert response.json() == {"sc": False, "msg": get_label("badRequestLabel")}


class TestCategoryConsole:
    """Update, remove, reorder and list through the console."""

    def test_list_is_ordered(self, client: TestClient):
        client.post("/console/category/", json={"categoryURI": "/b", "categoryOrder": 2})
        client.post("/console/category/", json={"categoryURI": "/a", "categoryOrder": 1})

        data = client.get("/console/categories").json()
        assert data["sc"] is True
        assert [c["categoryURI"] for c in data["categories"]] == ["/a", "/b"]

    def test_list_empty(self, client: TestClient):
        data = client.get("/console/categories").json()
        assert data == {"sc": True, "categories": []}

    def test_update_category(self, client: TestClient, test_category_data):
        oid = client.post("/console/category/", json=test_category_data).json()["oId"]

        response = client.put(
            "/console/category/",
            json={"oId": int(oid), "categoryTitle": "Py", "categoryURI": "/py"},
        )
        assert response.json() == {"sc": True, "msg": get_label("updateSuccLabel")}

        category = client.get(f"/console/category/{oid}").json()["category"]
        assert category["categoryTitle"] == "Py"
        assert category["categoryURI"] == "/py"
        assert category["categoryOrder"] == 3

    def test_update_missing_category(self, client: TestClient):
        data = client.put("/console/category/", json={"oId": 404, "categoryURI": "/x"}).json()
        assert data["sc"] is False
        assert get_label("categoryNotFoundLabel") in data["msg"]

    def test_remove_category(self, client: TestClient, test_category_data):
        oid = client.post("/console/category/", json=test_category_data).json()["oId"]

        data = client.delete(f"/console/category/{oid}").json()
        assert data == {"sc": True, "msg": get_label("removeSuccLabel")}

        missing = client.get(f"/console/category/{oid}").json()
        assert missing["sc"] is False

    def test_change_order(self, client: TestClient):
        first = client.post("/console/category/", json={"categoryURI": "/a", "categoryOrder": 1}).json()["oId"]
        second = client.post("/console/category/", json={"categoryURI": "/b", "categoryOrder": 2}).json()["oId"]

        data = client.put("/console/category/order/", json={"oId": int(second), "direction": "up"}).json()
        assert data["sc"] is True

        ids = [c["oId"] for c in client.get("/console/categories").json()["categories"]]
        assert ids == [second, first]

    def test_change_order_invalid_direction(self, client: TestClient):
        oid = client.post("/console/category/", json={"categoryURI": "/a"}).json()["oId"]
        data = client.put("/console/category/order/", json={"oId": int(oid), "direction": "left"}).json()
        assert data == {"sc": False, "msg": get_label("invalidDirectionLabel")}


class TestConsoleFailures:
    """Infrastructure failures are rendered without leaking driver details."""

    def test_storage_error_renders_generic_message(self, client: TestClient, session_factory):
        Base.metadata.drop_all(bind=session_factory.kw["bind"])

        added = client.post("/console/category/", json={"categoryURI": "/x"})
        assert added.status_code == 200
        assert added.json() == {"sc": False, "msg": get_label("systemErrLabel")}

        listed = client.get("/console/categories").json()
        assert listed == {"sc": False, "msg": get_label("systemErrLabel")}
        assert "no such table" not in listed["msg"]

    def test_unhandled_database_error_returns_json_500(self, client: TestClient, monkeypatch):
        def broken_list(self):
            raise OperationalError("SELECT * FROM category", {}, Exception("disk I/O error"))

        monkeypatch.setattr(CategoryStore, "list_ordered", broken_list)

        response = client.get("/console/categories")
        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail
        assert "disk I/O error" not in detail
