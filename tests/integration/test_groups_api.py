"""Integration tests for group endpoints."""

import re

CODE_RE = re.compile(r"^[A-Z0-9]{6}$")


class TestGroups:

    def test_create_group_gets_join_code(self, client, db, workshop):
        response = client.post(f"/api/v1/workshops/{workshop['id']}/groups", json={"group_name": "Rockets"})

        assert response.status_code == 201
        body = response.json()
        assert body["group_name"] == "Rockets"
        assert CODE_RE.match(body["group_code"])

    def test_bulk_create_names_and_unique_codes(self, client, db, workshop):
        response = client.post(f"/api/v1/workshops/{workshop['id']}/groups/bulk", json={"count": 4})

        assert response.status_code == 201
        groups = response.json()
        assert [g["group_name"] for g in groups] == ["Team 1", "Team 2", "Team 3", "Team 4"]
        codes = [g["group_code"] for g in groups]
        assert len(set(codes)) == 4
        assert all(CODE_RE.match(c) for c in codes)
        assert len(db.rows("workshop_groups", workshop_id=workshop["id"])) == 4

    def test_bulk_create_limit(self, client, workshop):
        response = client.post(f"/api/v1/workshops/{workshop['id']}/groups/bulk", json={"count": 101})
        assert response.status_code == 400

    def test_bulk_create_rejects_zero(self, client, workshop):
        response = client.post(f"/api/v1/workshops/{workshop['id']}/groups/bulk", json={"count": 0})
        assert response.status_code == 422

    def test_code_collision_retried(self, client, db, workshop, monkeypatch):
        db.seed("workshop_groups", workshop_id="other", group_name="Taken", group_code="TAKEN1")
        codes = iter(["TAKEN1", "FRESH1"])
        monkeypatch.setattr("app.modules.groups.codes.generate_group_code", lambda length=6: next(codes))

        response = client.post(f"/api/v1/workshops/{workshop['id']}/groups", json={"group_name": "New"})

        assert response.status_code == 201
        assert response.json()["group_code"] == "FRESH1"

    def test_code_exhaustion_is_server_error(self, client, db, workshop, monkeypatch):
        db.seed("workshop_groups", workshop_id="other", group_name="Taken", group_code="TAKEN1")
        monkeypatch.setattr("app.modules.groups.codes.generate_group_code", lambda length=6: "TAKEN1")

        response = client.post(f"/api/v1/workshops/{workshop['id']}/groups", json={"group_name": "New"})

        assert response.status_code == 500
        assert len(db.rows("workshop_groups", workshop_id=workshop["id"])) == 0

    def test_list_with_member_counts(self, client, db, workshop):
        first = db.seed("workshop_groups", workshop_id=workshop["id"], group_name="A", group_code="AAAAAA")
        second = db.seed("workshop_groups", workshop_id=workshop["id"], group_name="B", group_code="BBBBBB")
        db.seed("group_members", group_id=first["id"], user_id="u1")
        db.seed("group_members", group_id=first["id"], user_id="u2")

        response = client.get(f"/api/v1/workshops/{workshop['id']}/groups")

        assert [(g["id"], g["member_count"]) for g in response.json()] == [(first["id"], 2), (second["id"], 0)]

    def test_rename_keeps_code(self, client, db, workshop):
        group = db.seed("workshop_groups", workshop_id=workshop["id"], group_name="Old", group_code="KEEP01")

        response = client.put(f"/api/v1/groups/{group['id']}", json={"group_name": "New"})

        assert response.status_code == 200
        assert response.json()["group_code"] == "KEEP01"
        assert db.find("workshop_groups", group["id"])["group_name"] == "New"

    def test_delete_group(self, client, db, workshop):
        group = db.seed("workshop_groups", workshop_id=workshop["id"], group_name="Gone", group_code="GONE01")

        assert client.delete(f"/api/v1/groups/{group['id']}").status_code == 204
        assert client.get(f"/api/v1/groups/{group['id']}").status_code == 404

    def test_export_codes(self, client, db, workshop):
        db.seed("workshop_groups", workshop_id=workshop["id"], group_name="Team 1", group_code="ABC123")

        response = client.get(f"/api/v1/workshops/{workshop['id']}/groups/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text == "Group Name,Join Code\nTeam 1,ABC123\n"
