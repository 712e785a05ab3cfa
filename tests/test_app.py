"""
Inspector service tests: the JSON envelope, seeding, and each tree route.
"""

import pytest

import app as inspector


@pytest.fixture
def client():
    inspector.warm_start(seed="5=v5,3=v3,8=v8,1=v1,4=v4,7=v7,9=v9", key_type="int")
    inspector.app.config["TESTING"] = True
    with inspector.app.test_client() as c:
        yield c
    inspector.tree.clear()


@pytest.fixture
def empty_client():
    inspector.warm_start(seed="", key_type="int")
    inspector.app.config["TESTING"] = True
    with inspector.app.test_client() as c:
        yield c


class TestWarmStart:

    def test_seed_is_loaded(self, client):
        body = client.get("/api/status").get_json()
        assert body["ok"] is True
        assert body["data"]["size"] == 7
        assert body["data"]["seeded"] == 7
        assert body["data"]["height"] == 3
        assert body["data"]["key_type"] == "int"

    def test_bad_and_duplicate_seed_entries_are_skipped(self, capsys):
        inspector.warm_start(seed="2=a,x=b,2=c", key_type="int")
        assert inspector.tree.size() == 1
        assert inspector.tree.find(2) == "a"
        assert "Skipping bad seed entry" in capsys.readouterr().out

    def test_unknown_key_type_falls_back_to_int(self):
        inspector.warm_start(seed="1=a", key_type="complex")
        assert inspector.STATE["key_type"] == "int"
        assert inspector.tree.find(1) == "a"

    def test_str_keys(self):
        inspector.warm_start(seed="pear=1,apple=2", key_type="str")
        with inspector.app.test_client() as c:
            body = c.get("/api/tree/min").get_json()
        assert body["data"] == {"key": "apple", "value": "2"}


class TestQueries:

    def test_find(self, client):
        body = client.get("/api/tree/find/7").get_json()
        assert body["data"] == {"key": 7, "value": "v7"}

    def test_find_missing(self, client):
        resp = client.get("/api/tree/find/6")
        assert resp.status_code == 404
        assert resp.get_json()["ok"] is False

    def test_find_bad_key(self, client):
        resp = client.get("/api/tree/find/abc")
        assert resp.status_code == 400
        assert client.get("/api/tree/find/1.5").status_code == 400

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf"])
    def test_find_non_finite_key_on_float_tree(self, raw):
        inspector.warm_start(seed="5=v5,3=v3", key_type="float")
        with inspector.app.test_client() as c:
            resp = c.get(f"/api/tree/find/{raw}")
            assert resp.status_code == 400
            assert resp.get_json()["ok"] is False
            assert c.post("/api/tree/insert", json={"key": 2, "value": "v2"}).status_code == 200
        assert inspector.tree.find(2.0) == "v2"
        assert inspector.tree.size() == 3

    def test_root_min_max(self, client):
        assert client.get("/api/tree/root").get_json()["data"] == {"key": 5, "value": "v5"}
        assert client.get("/api/tree/min").get_json()["data"] == {"key": 1, "value": "v1"}
        assert client.get("/api/tree/max").get_json()["data"] == {"key": 9, "value": "v9"}

    @pytest.mark.parametrize("route", ["/api/tree/root", "/api/tree/min", "/api/tree/max"])
    def test_empty_tree_is_404(self, empty_client, route):
        resp = empty_client.get(route)
        assert resp.status_code == 404
        assert resp.get_json() == {"ok": False, "error": "tree is empty"}

    def test_inorder(self, client):
        data = client.get("/api/tree/inorder").get_json()["data"]
        assert data["count_returned"] == 7
        assert [row["key"] for row in data["rows"]] == [1, 3, 4, 5, 7, 8, 9]

    def test_levels(self, client):
        data = client.get("/api/tree/levels").get_json()["data"]
        assert data["levels"] == [["v5"], ["v3", "v8"], ["v1", "v4", "v7", "v9"]]

    def test_levels_text(self, client):
        resp = client.get("/api/tree/levels.txt")
        assert resp.mimetype == "text/plain"
        assert resp.get_data(as_text=True) == "v5\nv3 v8\nv1 v4 v7 v9\n"

    def test_levels_text_empty(self, empty_client):
        assert empty_client.get("/api/tree/levels.txt").get_data(as_text=True) == ""

    def test_home_page(self, client):
        html = client.get("/").get_data(as_text=True)
        assert "7 pairs, height 3" in html
        assert "v3 v8" in html


class TestMutations:

    def test_insert(self, client):
        resp = client.post("/api/tree/insert", json={"key": 6, "value": "v6"})
        assert resp.status_code == 200
        assert resp.get_json()["data"] == {"inserted": True, "key": 6, "size": 8}
        assert inspector.tree.find(6) == "v6"

    def test_insert_duplicate_conflicts(self, client):
        resp = client.post("/api/tree/insert", json={"key": 5, "value": "other"})
        assert resp.status_code == 409
        assert resp.get_json()["value"] == "v5"
        assert inspector.tree.find(5) == "v5"
        assert inspector.tree.size() == 7

    def test_insert_float_key_on_int_tree(self, client):
        resp = client.post("/api/tree/insert", json={"key": 1.5, "value": "x"})
        assert resp.status_code == 400
        assert inspector.tree.find(1) == "v1"
        assert inspector.tree.size() == 7

    def test_insert_bool_key_on_int_tree(self, client):
        resp = client.post("/api/tree/insert", json={"key": True, "value": "x"})
        assert resp.status_code == 400
        assert inspector.tree.size() == 7

    def test_insert_number_key_on_str_tree(self):
        inspector.warm_start(seed="a=1", key_type="str")
        with inspector.app.test_client() as c:
            resp = c.post("/api/tree/insert", json={"key": 5, "value": "x"})
        assert resp.status_code == 400
        assert list(inspector.tree) == ["a"]

    def test_insert_missing_fields(self, client):
        resp = client.post("/api/tree/insert", json={"key": 6})
        assert resp.status_code == 400
        assert "value" in resp.get_json()["error"]

    def test_erase_two_children(self, client):
        resp = client.post("/api/tree/erase/5")
        assert resp.get_json()["data"] == {"erased": True, "key": 5, "size": 6}
        assert client.get("/api/tree/root").get_json()["data"]["key"] == 7

    def test_erase_missing(self, client):
        resp = client.post("/api/tree/erase/6")
        assert resp.status_code == 404
        assert inspector.tree.size() == 7

    def test_clear(self, client):
        client.post("/api/tree/clear")
        body = client.get("/api/status").get_json()
        assert body["data"]["size"] == 0
        assert body["data"]["empty"] is True
