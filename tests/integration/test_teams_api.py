import json

import pytest

TEAMS = "/api/Teams"


def _where(where) -> dict:
    return {"where": json.dumps(where)}


@pytest.fixture
def team(client):
    res = client.post(TEAMS, json={"name": "test-team-new", "description": "team created for test purpose"})
    assert res.status_code == 200
    return res.json()


def test_create_team(client):
    res = client.post(TEAMS, json={"name": "Team Alpha", "description": "This is Team Alpha"})

    assert res.status_code == 200
    body = res.json()
    assert isinstance(body["id"], int)
    assert body["name"] == "Team Alpha"
    assert body["description"] == "This is Team Alpha"


def test_create_team_without_description_returns_null(client):
    res = client.post(TEAMS, json={"name": "A"})
    assert res.status_code == 200
    assert res.json()["description"] is None


def test_create_team_without_name_is_rejected(client):
    res = client.post(TEAMS, json={"description": "nameless"})
    assert res.status_code == 400
    assert client.get(f"{TEAMS}/count").json() == {"count": 0}


def test_list_teams(client, team):
    res = client.get(TEAMS)
    assert res.status_code == 200
    assert [t["id"] for t in res.json()] == [team["id"]]


def test_list_teams_with_filter(client):
    for name in ("b", "a", "c"):
        client.post(TEAMS, json={"name": name})

    res = client.get(TEAMS, params={"filter": json.dumps({"order": "name ASC", "limit": 2})})

    assert [t["name"] for t in res.json()] == ["a", "b"]


def test_malformed_filter_is_rejected(client):
    res = client.get(TEAMS, params={"filter": "{oops"})
    assert res.status_code == 400
    assert "filter" in res.json()["detail"]


def test_patch_collection_updates_existing_team(client, team):
    res = client.patch(TEAMS, json={"id": team["id"], "name": "Updated Team"})

    assert res.status_code == 200
    body = res.json()
    assert body["id"] == team["id"]
    assert body["name"] == "Updated Team"
    assert body["description"] == team["description"]


def test_put_collection_replaces_existing_team(client, team):
    res = client.put(TEAMS, json={"id": team["id"], "name": "Team Beta", "description": "Team Beta Description"})

    assert res.status_code == 200
    assert res.json() == {"id": team["id"], "name": "Team Beta", "description": "Team Beta Description"}


def test_get_team_by_id(client, team):
    res = client.get(f"{TEAMS}/{team['id']}")
    assert res.status_code == 200
    assert res.json() == team


def test_get_missing_team_is_404(client):
    res = client.get(f"{TEAMS}/999999")
    assert res.status_code == 404
    assert "detail" in res.json()


def test_non_integer_id_is_400(client):
    assert client.get(f"{TEAMS}/abc").status_code == 400


def test_head_team(client, team):
    assert client.head(f"{TEAMS}/{team['id']}").status_code == 200
    assert client.head(f"{TEAMS}/999999").status_code == 404


def test_exists_endpoint(client, team):
    assert client.get(f"{TEAMS}/{team['id']}/exists").json() == {"exists": True}
    assert client.get(f"{TEAMS}/999999/exists").json() == {"exists": False}


def test_put_by_id_replaces_team(client, team):
    res = client.put(f"{TEAMS}/{team['id']}", json={"name": "put-team-name"})

    assert res.status_code == 200
    assert res.json() == {"id": team["id"], "name": "put-team-name", "description": None}


def test_put_by_id_missing_team_is_404(client):
    assert client.put(f"{TEAMS}/999999", json={"name": "x"}).status_code == 404


def test_patch_by_id_merges(client, team):
    res = client.patch(f"{TEAMS}/{team['id']}", json={"name": "Patched"})

    assert res.status_code == 200
    assert res.json()["description"] == team["description"]
    assert res.json()["name"] == "Patched"


def test_post_replace(client, team):
    res = client.post(f"{TEAMS}/{team['id']}/replace", json={"name": "Team Gamma"})

    assert res.status_code == 200
    assert res.json()["id"] == team["id"]
    assert res.json()["description"] is None


def test_delete_by_id(client, team):
    res = client.delete(f"{TEAMS}/{team['id']}")
    assert res.status_code == 200
    assert res.json() == {"count": 1}

    assert client.get(f"{TEAMS}/{team['id']}/exists").json() == {"exists": False}
    assert client.delete(f"{TEAMS}/{team['id']}").json() == {"count": 0}


def test_count_and_find_one(client, team):
    client.post(TEAMS, json={"name": "other"})

    assert client.get(f"{TEAMS}/count").json() == {"count": 2}
    assert client.get(f"{TEAMS}/count", params=_where({"name": "other"})).json() == {"count": 1}

    res = client.get(f"{TEAMS}/findOne", params={"filter": json.dumps({"where": {"id": team["id"]}})})
    assert res.status_code == 200
    assert res.json()["id"] == team["id"]

    missing = client.get(f"{TEAMS}/findOne", params={"filter": json.dumps({"where": {"name": "nobody"}})})
    assert missing.status_code == 404


def test_replace_or_create_without_id_creates(client):
    res = client.post(f"{TEAMS}/replaceOrCreate", json={"name": "Team Delta", "description": "team delta desc"})
    assert res.status_code == 200
    assert "id" in res.json()
    assert client.get(f"{TEAMS}/count").json() == {"count": 1}


def test_update_all_with_where(client, team):
    res = client.post(
        f"{TEAMS}/update",
        params=_where({"id": team["id"]}),
        json={"name": "Updated Team", "description": "updated delta desc"},
    )

    assert res.status_code == 200
    assert res.json() == {"count": 1}
    assert client.get(f"{TEAMS}/{team['id']}").json()["description"] == "updated delta desc"


def test_upsert_with_where(client, team):
    res = client.post(
        f"{TEAMS}/upsertWithWhere",
        params=_where({"id": team["id"]}),
        json={"description": "upsert-team-desc"},
    )

    assert res.status_code == 200
    assert res.json()["id"] == team["id"]
    assert res.json()["description"] == "upsert-team-desc"


def test_unknown_where_field_is_rejected(client):
    res = client.get(f"{TEAMS}/count", params=_where({"colour": "red"}))
    assert res.status_code == 400


class TestTeamMembers:
    def _members(self, team):
        return f"{TEAMS}/{team['id']}/members"

    def test_empty_team_has_no_members(self, client, team):
        res = client.get(self._members(team))
        assert res.status_code == 200
        assert res.json() == []

    def test_nested_create_sets_team(self, client, team):
        res = client.post(self._members(team), json={"name": "post-team-id-member", "role": "member"})

        assert res.status_code == 200
        body = res.json()
        assert body["teamId"] == team["id"]
        assert body["name"] == "post-team-id-member"
        assert body["role"] == "member"

    def test_nested_create_overrides_payload_team(self, client, team):
        other = client.post(TEAMS, json={"name": "other"}).json()

        res = client.post(self._members(team), json={"name": "x", "role": "member", "teamId": other["id"]})

        assert res.status_code == 200
        assert res.json()["teamId"] == team["id"]

    def test_nested_routes_on_missing_team_are_404(self, client):
        assert client.get(f"{TEAMS}/999999/members").status_code == 404
        assert client.post(f"{TEAMS}/999999/members", json={"name": "x", "role": "y"}).status_code == 404
        assert client.get(f"{TEAMS}/999999/members/count").status_code == 404

    def test_fetch_update_delete_member_of_team(self, client, team):
        member = client.post(self._members(team), json={"name": "m", "role": "member"}).json()
        url = f"{self._members(team)}/{member['id']}"

        assert client.get(url).json()["id"] == member["id"]

        updated = client.put(url, json={"role": "put-new-role"})
        assert updated.status_code == 200
        assert updated.json()["role"] == "put-new-role"
        assert updated.json()["teamId"] == team["id"]

        deleted = client.delete(url)
        assert deleted.status_code == 204
        assert client.get(url).status_code == 404

    def test_member_of_other_team_is_404(self, client, team):
        other = client.post(TEAMS, json={"name": "other"}).json()
        member = client.post(f"{TEAMS}/{other['id']}/members", json={"name": "m", "role": "r"}).json()

        assert client.get(f"{self._members(team)}/{member['id']}").status_code == 404
        assert client.delete(f"{self._members(team)}/{member['id']}").status_code == 404

    def test_count_and_delete_all(self, client, team):
        for name in ("a", "b"):
            client.post(self._members(team), json={"name": name, "role": "member"})
        client.post("/api/Members", json={"name": "loner", "role": "member"})

        assert client.get(f"{self._members(team)}/count").json() == {"count": 2}

        res = client.delete(self._members(team))
        assert res.status_code == 204

        assert client.get(f"{self._members(team)}/count").json() == {"count": 0}
        assert client.get("/api/Members/count").json() == {"count": 1}


def test_patch_collection_with_partial_payload(client, team):
    res = client.patch(TEAMS, json={"id": team["id"], "description": "d"})

    assert res.status_code == 200
    assert res.json() == {"id": team["id"], "name": team["name"], "description": "d"}


def test_create_with_taken_id_is_409(client, team):
    res = client.post(TEAMS, json={"id": team["id"], "name": "Clash"})

    assert res.status_code == 409
    assert client.get(f"{TEAMS}/{team['id']}").json()["name"] == team["name"]


def test_create_with_explicit_id_then_generated_ids(client):
    fixed = client.post(TEAMS, json={"id": 40, "name": "Fixed"})
    nxt = client.post(TEAMS, json={"name": "Next"})

    assert fixed.json()["id"] == 40
    assert nxt.status_code == 200
    assert nxt.json()["id"] > 40
