"""Integration tests for judge endpoints."""


class TestJudges:

    def test_lookup_by_email(self, client, db):
        db.seed("profiles", id="u1", full_name="Grace Hopper", email="grace@example.com")

        response = client.get("/api/v1/users/lookup", params={"email": "grace@example.com"})

        assert response.status_code == 200
        assert response.json()["id"] == "u1"

    def test_lookup_unknown_email(self, client):
        assert client.get("/api/v1/users/lookup", params={"email": "nobody@example.com"}).status_code == 404

    def test_lookup_invalid_email(self, client):
        assert client.get("/api/v1/users/lookup", params={"email": "not-an-email"}).status_code == 422

    def test_assign_and_list(self, client, db, workshop):
        db.seed("profiles", id="u1", full_name="Grace Hopper", email="grace@example.com")

        response = client.post(f"/api/v1/workshops/{workshop['id']}/judges", json={"user_id": "u1"})

        assert response.status_code == 201
        assert response.json()["full_name"] == "Grace Hopper"
        judges = client.get(f"/api/v1/workshops/{workshop['id']}/judges").json()
        assert [j["user_id"] for j in judges] == ["u1"]

    def test_duplicate_assignment_conflicts(self, client, db, workshop):
        db.seed("workshop_judges", workshop_id=workshop["id"], user_id="u1")

        response = client.post(f"/api/v1/workshops/{workshop['id']}/judges", json={"user_id": "u1"})

        assert response.status_code == 409
        assert len(db.rows("workshop_judges", workshop_id=workshop["id"])) == 1

    def test_remove_judge(self, client, db, workshop):
        judge = db.seed("workshop_judges", workshop_id=workshop["id"], user_id="u1")

        assert client.delete(f"/api/v1/judges/{judge['id']}").status_code == 204
        assert client.delete(f"/api/v1/judges/{judge['id']}").status_code == 404
