"""Unit tests for turning GitHub payloads into typed envelopes."""

import pytest

from hookrelay.errors import PayloadError
from hookrelay.events import Commit, envelope_to_dict
from hookrelay.events.parsing import (
    branch_from_ref,
    parse_issue_comment,
    parse_pull_request,
    parse_push,
    parse_security_advisory,
    parse_vulnerability_alert,
    require,
)
from tests.payloads import (
    issue_comment_payload,
    pull_request_payload,
    push_payload,
    security_advisory_payload,
    vulnerability_alert_payload,
)


class TestRequire:
    """Test cases for required field lookup."""

    def test_nested_field(self):
        assert require({"a": {"b": "x"}}, "a.b", "push") == "x"

    def test_missing_field_names_path(self):
        with pytest.raises(PayloadError) as exc_info:
            require({"a": {}}, "a.b", "push")
        assert exc_info.value.field_path == "a.b"
        assert exc_info.value.event_name == "push"

    def test_null_counts_as_missing(self):
        with pytest.raises(PayloadError, match="missing"):
            require({"a": None}, "a", "push")

    def test_wrong_type_rejected(self):
        with pytest.raises(PayloadError, match="not a str"):
            require({"a": 5}, "a", "push")

    def test_bool_is_not_a_number(self):
        with pytest.raises(PayloadError):
            require({"n": True}, "n", "pull_request", (int,))


@pytest.mark.parametrize(
    "ref,expected",
    [
        ("refs/heads/main", "main"),
        ("refs/heads/feature/login", "feature/login"),
        ("refs/tags/v1.0", "refs/tags/v1.0"),
    ],
)
def test_branch_from_ref(ref, expected):
    assert branch_from_ref(ref) == expected


class TestParsePush:
    """Test cases for push payload parsing."""

    def test_fields(self):
        payload = push_payload(
            commits=[
                {"added": [".env"], "modified": [], "removed": ["old.txt"]},
                {"added": [], "modified": ["src/app.py"]},
            ]
        )

        event = parse_push(payload)

        assert event.branch == "main"
        assert event.repository == "org/repo"
        assert event.pusher_name == "alice"
        assert event.head_commit_sha == "abc123"
        assert event.commits == (
            Commit(added_paths=frozenset({".env"})),
            Commit(modified_paths=frozenset({"src/app.py"})),
        )

    def test_missing_path_lists_default_empty(self):
        event = parse_push(push_payload(commits=[{"id": "deadbeef"}]))
        assert event.commits == (Commit(),)

    def test_missing_pusher_rejected(self):
        payload = push_payload()
        del payload["pusher"]
        with pytest.raises(PayloadError, match="pusher.name"):
            parse_push(payload)

    def test_commits_must_be_a_list(self):
        payload = push_payload()
        payload["commits"] = "nope"
        with pytest.raises(PayloadError, match="commits"):
            parse_push(payload)

    @pytest.mark.parametrize("key", ["added", "modified"])
    def test_non_string_paths_rejected(self, key):
        payload = push_payload(commits=[{key: [".env", 42]}])
        with pytest.raises(PayloadError) as exc_info:
            parse_push(payload)
        assert exc_info.value.field_path == f"commits[0].{key}"
        assert exc_info.value.detail == "not a list of str"

    def test_raw_payload_kept_outside_equality(self):
        payload = push_payload(commits=[{"added": [".env"], "modified": []}])

        event = parse_push(payload)

        assert event.raw_payload is payload
        assert event == parse_push(push_payload(commits=[{"added": [".env"]}]))
        assert "raw_payload" not in envelope_to_dict(event)

    def test_envelope_to_dict_is_json_friendly(self):
        event = parse_push(push_payload(commits=[{"added": ["b", "a"], "modified": []}]))

        data = envelope_to_dict(event)

        assert data["commits"] == [{"added_paths": ["a", "b"], "modified_paths": []}]
        assert data["branch"] == "main"


class TestParsePullRequest:
    """Test cases for pull request payload parsing."""

    def test_fields(self):
        event = parse_pull_request(pull_request_payload("closed", merged=True))

        assert event.action == "closed"
        assert event.number == 42
        assert event.title == "Add feature"
        assert event.base_branch == "main"
        assert event.head_branch == "feature"
        assert event.author_login == "bob"
        assert event.repository == "org/repo"
        assert event.merged is True

    @pytest.mark.parametrize("merged", [None, "yes"])
    def test_merged_defaults_false(self, merged):
        payload = pull_request_payload()
        payload["pull_request"]["merged"] = merged
        assert parse_pull_request(payload).merged is False

    def test_missing_title_rejected(self):
        payload = pull_request_payload()
        del payload["pull_request"]["title"]
        with pytest.raises(PayloadError, match="pull_request.title"):
            parse_pull_request(payload)


class TestParseOtherEvents:
    """Test cases for the remaining event payloads."""

    def test_issue_comment(self):
        event = parse_issue_comment(issue_comment_payload(body="ship it"))

        assert event.action == "created"
        assert event.issue_number == 7
        assert event.comment_body == "ship it"
        assert event.comment_author_login == "carol"

    def test_security_advisory(self):
        event = parse_security_advisory(security_advisory_payload())
        assert event.summary == "RCE in parser"
        assert event.repository == "org/repo"

    def test_vulnerability_alert_affected_package_name(self):
        event = parse_vulnerability_alert(vulnerability_alert_payload(package="lodash"))
        assert event.package_name == "lodash"

    def test_vulnerability_alert_legacy_package_name(self):
        payload = vulnerability_alert_payload()
        payload["alert"] = {"package_name": "minimist"}
        assert parse_vulnerability_alert(payload).package_name == "minimist"

    def test_vulnerability_alert_without_package_rejected(self):
        payload = vulnerability_alert_payload()
        payload["alert"] = {}
        with pytest.raises(PayloadError, match="alert.package_name"):
            parse_vulnerability_alert(payload)
