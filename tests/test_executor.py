"""Tests for the user-creation and group-assignment writes."""

from okta_bulk.http_client import OktaClient
from okta_bulk.loader import Assignment
from okta_bulk.workflow.executor import assign_users, create_users
from tests.conftest import API_KEY
from tests.mock_okta_server import MockOktaServer


def _resolved(login, group, user_id, group_id):
    a = Assignment(login, group)
    a.user_id = user_id
    a.group_id = group_id
    return a


class TestCreateUsers:

    def test_payload_profile_matches_csv_row(self, server, client):
        results = create_users(client, [{"login": "a@x.com", "firstName": "Alice"}])

        assert results[0].created
        stored = server.users[results[0].user_id]
        assert stored["profile"] == {"login": "a@x.com", "firstName": "Alice"}

    def test_activate_flag_is_sent(self, server, client):
        create_users(client, [{"login": "a@x.com"}], activate=False)
        create_users(client, [{"login": "b@x.com"}], activate=True)

        posts = server.requests_for("POST", "users")
        assert [q["activate"] for _, _, q in posts] == [["false"], ["true"]]
        statuses = sorted(u["status"] for u in server.users.values())
        assert statuses == ["ACTIVE", "STAGED"]

    def test_failed_row_does_not_stop_the_batch(self, server, client, capsys):
        server.add_user("taken@x.com")
        profiles = [{"login": "a@x.com"}, {"login": "taken@x.com"}, {"login": "c@x.com"}]

        results = create_users(client, profiles)

        assert [r.created for r in results] == [True, False, True]
        assert results[1].message == "400 Bad Request"
        assert results[1].user_id is None
        out = capsys.readouterr().out
        assert "Unable to create user taken@x.com" in out
        assert "Bad Request" in out
        assert "Api validation failed: login" in out


class TestAssignUsers:

    def test_resolved_records_are_assigned(self, server, client):
        gid = server.add_group("group1")
        uid = server.add_user("alice@x.com")
        records = [_resolved("alice@x.com", "group1", uid, gid)]

        attempted = assign_users(client, records)

        assert attempted == 1
        assert records[0].assigned
        assert uid in server.memberships[gid]

    def test_unresolved_records_are_never_attempted(self, server, client):
        gid = server.add_group("group1")
        uid = server.add_user("alice@x.com")
        records = [
            _resolved("alice@x.com", "group1", uid, None),
            _resolved("alice@x.com", "group1", None, gid),
            _resolved("alice@x.com", "group1", "", ""),
        ]

        attempted = assign_users(client, records)

        assert attempted == 0
        assert not any(r.assigned for r in records)
        assert server.requests_for("PUT", "groups") == []

    def test_failed_put_leaves_record_unassigned(self, capsys):
        with MockOktaServer(api_key=API_KEY) as server:
            locked = server.add_group("locked")
            open_gid = server.add_group("open")
            server.failures["assign"] = {locked}
            uid = server.add_user("alice@x.com")
            records = [
                _resolved("alice@x.com", "locked", uid, locked),
                _resolved("alice@x.com", "open", uid, open_gid),
            ]

            assign_users(OktaClient(server.base_url, API_KEY), records)

        assert [r.assigned for r in records] == [False, True]
        out = capsys.readouterr().out
        assert f"Unable to assign alice@x.com ({uid}) to locked ({locked})" in out
        assert "Forbidden" in out

    def test_each_record_is_written_once(self, server, client):
        gid = server.add_group("group1")
        uid = server.add_user("alice@x.com")
        records = [_resolved("alice@x.com", "group1", uid, gid) for _ in range(3)]

        assign_users(client, records)

        assert len(server.requests_for("PUT", "groups")) == 3
