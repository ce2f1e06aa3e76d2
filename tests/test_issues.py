"""Tests for issues, ignores and issue details."""

import json
import urllib.parse
from datetime import datetime, timezone

import pytest
import responses

from snyk_api.entities import Ignore, IgnoreOptions, Issue, IssueV2, Org, Project, decode_ignored_issues
from snyk_api.errors import DecodeError, UnsupportedOperation, ValidationError

# Constants
MOCK_API_URL = "https://api.snyk.io"
TEST_ORG_ID = "8bcff720-99a4-4442-bb35-31f7a74d27b0"
TEST_PROJECT_ID = "331ede0a-de94-456f-b788-166caeca58bf"
VULN_KEY = "SNYK-JS-LODASH-567746"
CODE_KEY = "57664a44-277c-621c-7be0-3776cc899355"
ISSUES_URL = f"{MOCK_API_URL}/rest/orgs/{TEST_ORG_ID}/issues"
IGNORE_URL = f"{MOCK_API_URL}/v1/org/{TEST_ORG_ID}/project/{TEST_PROJECT_ID}/ignore/{VULN_KEY}"


def query_of(call) -> dict:
    return urllib.parse.parse_qs(urllib.parse.urlsplit(call.request.url).query)


@pytest.fixture
def project(client) -> Project:
    return Project(id=TEST_PROJECT_ID, type="npm", origin="github", org_id=TEST_ORG_ID, client=client)


class TestIssuesV2:
    """Tests for REST issue listing."""

    @responses.activate
    def test_org_issues(self, client, load_fixture):
        responses.add(responses.GET, ISSUES_URL, json=load_fixture("issues_v2_get_all.json"))

        issues = Org(id=TEST_ORG_ID, client=client).issues.get_all_v2()

        assert [i.key for i in issues] == [VULN_KEY, CODE_KEY]
        vuln = issues[0]
        assert vuln.title == "Prototype Pollution"
        assert vuln.effective_severity_level == "high"
        assert vuln.ignored is False
        assert vuln.created_at == datetime(2023, 8, 1, 10, 0, tzinfo=timezone.utc)
        assert vuln.classes[0].id == "CWE-400"
        assert vuln.problems[0].source == "SNYK"
        assert vuln.org_id == TEST_ORG_ID
        assert vuln.project_id == TEST_PROJECT_ID
        assert issues[1].resolution.type == "fixed"

        query = query_of(responses.calls[0])
        assert query == {"version": ["2024-05-23~beta"], "limit": ["100"]}

    @responses.activate
    def test_project_issues(self, project, load_fixture):
        responses.add(responses.GET, ISSUES_URL, json=load_fixture("issues_v2_get_all.json"))

        issues = project.issues.get_all_v2()

        assert len(issues) == 2
        query = query_of(responses.calls[0])
        assert query["scan_item.type"] == ["project"]
        assert query["scan_item.id"] == [TEST_PROJECT_ID]
        assert query["version"] == ["2024-05-23~beta"]

    def test_to_issue(self, client):
        v2 = IssueV2(
            id="9a1c4f4e",
            key=VULN_KEY,
            title="Prototype Pollution",
            type="package_vulnerability",
            ignored=True,
            org_id=TEST_ORG_ID,
            project_id=TEST_PROJECT_ID,
            client=client,
        )

        issue = v2.to_issue()

        assert issue == Issue(
            id=VULN_KEY,
            issue_type="package_vulnerability",
            is_ignored=True,
            org_id=TEST_ORG_ID,
            project_id=TEST_PROJECT_ID,
        )
        assert issue.client is client
        assert issue.issue_data.title == ""


class TestAggregatedIssues:
    @responses.activate
    def test_get_all(self, project, client, load_fixture):
        url = f"{MOCK_API_URL}/v1/org/{TEST_ORG_ID}/project/{TEST_PROJECT_ID}/aggregated-issues"
        responses.add(responses.POST, url, json=load_fixture("aggregated_issues.json"))

        issues = project.issues.get_all()

        assert len(issues) == 1
        issue = issues[0]
        assert issue.id == VULN_KEY
        assert issue.pkg_name == "lodash"
        assert issue.priority.factors[0].name == "isFixable"
        assert issue.issue_data.identifiers.cve == ["CVE-2020-8203"]
        assert issue.issue_data.cvss_score == 7.3
        assert issue.issue_data.publication_time == datetime(2020, 7, 15, 17, 17, 50, tzinfo=timezone.utc)
        assert issue.ignore_reasons[0].ignored_by.name == "Ada Lovelace"
        assert issue.fix_info.fixed_in == ["4.17.19"]
        assert issue.paths_link.endswith("/paths")
        assert issue.project_origin == "github"
        assert issue.client is client

        query = query_of(responses.calls[0])
        assert query == {"includeIntroducedThrough": ["true"], "includeDescription": ["true"]}
        assert responses.calls[0].request.headers["Content-Type"] == "application/json"

    @responses.activate
    def test_missing_issues_key(self, project):
        url = f"{MOCK_API_URL}/v1/org/{TEST_ORG_ID}/project/{TEST_PROJECT_ID}/aggregated-issues"
        responses.add(responses.POST, url, json={})

        assert project.issues.get_all() == []


class TestIgnoreOperations:
    """Tests for the per-issue ignore endpoints."""

    @pytest.fixture
    def issue(self, client) -> Issue:
        return Issue(id=VULN_KEY, org_id=TEST_ORG_ID, project_id=TEST_PROJECT_ID, client=client)

    @responses.activate
    def test_get_ignore(self, issue, load_fixture):
        flat = load_fixture("ignores_flat.json")[VULN_KEY][0]
        responses.add(responses.GET, IGNORE_URL, json=flat)

        ignore = issue.get_ignore()

        assert ignore.reason_type == "not-vulnerable"
        assert ignore.path == ["*"]
        assert ignore.ignored_by.email == "ada@example.com"

    @responses.activate
    def test_get_ignore_rejects_non_object(self, issue):
        responses.add(responses.GET, IGNORE_URL, json=[])

        with pytest.raises(DecodeError):
            issue.get_ignore()

    @responses.activate
    def test_add_ignore(self, issue):
        responses.add(responses.POST, IGNORE_URL, json={})

        issue.add_ignore(
            IgnoreOptions(
                ignore_path="*",
                reason="No user input reaches this code",
                reason_type="temporary-ignore",
                expires=datetime(2025, 1, 1, tzinfo=timezone.utc),
            )
        )

        assert json.loads(responses.calls[0].request.body) == {
            "ignorePath": "*",
            "reason": "No user input reaches this code",
            "reasonType": "temporary-ignore",
            "disregardIfFixable": False,
            "expires": "2025-01-01T00:00:00+00:00",
        }

    @responses.activate
    def test_replace_ignore(self, issue):
        responses.add(responses.PUT, IGNORE_URL, json={})

        issue.replace_ignore(IgnoreOptions(reason_type="wont-fix", disregard_if_fixable=True))

        assert json.loads(responses.calls[0].request.body) == {"reasonType": "wont-fix", "disregardIfFixable": True}

    @responses.activate
    def test_delete_ignore(self, issue):
        responses.add(responses.DELETE, IGNORE_URL, json={})

        issue.delete_ignore()

        assert len(responses.calls) == 1

    @pytest.mark.parametrize("reason_type", ["", "not-a-reason", "WONT-FIX"])
    @responses.activate
    def test_invalid_reason_type_sends_nothing(self, issue, reason_type):
        with pytest.raises(ValidationError, match="reason_type"):
            issue.add_ignore(IgnoreOptions(reason_type=reason_type))
        with pytest.raises(ValidationError):
            issue.replace_ignore(IgnoreOptions(reason_type=reason_type))

        assert len(responses.calls) == 0

    @responses.activate
    def test_v2_ignore_goes_through_v1_endpoint(self, client):
        """IssueV2 ignores are addressed by the issue key."""
        responses.add(responses.POST, IGNORE_URL, json={})
        responses.add(responses.DELETE, IGNORE_URL, json={})

        v2 = IssueV2(id="9a1c4f4e", key=VULN_KEY, org_id=TEST_ORG_ID, project_id=TEST_PROJECT_ID, client=client)
        v2.add_ignore(IgnoreOptions(reason_type="not-vulnerable"))
        v2.delete_ignore()

        assert [c.request.method for c in responses.calls] == ["POST", "DELETE"]


class TestIssueDetails:
    @responses.activate
    def test_code_issue_details(self, client, load_fixture):
        url = f"{ISSUES_URL}/detail/code/{CODE_KEY}"
        responses.add(responses.GET, url, json=load_fixture("issue_details_code.json"))

        v2 = IssueV2(
            id="6f1b1914", key=CODE_KEY, type="code", org_id=TEST_ORG_ID, project_id=TEST_PROJECT_ID, client=client
        )
        details = v2.get_details()

        assert details.type == "code_issue"
        assert details.cwe == ["CWE-416"]
        assert details.primary_region.start_line == 3886
        assert details.primary_region.start_column == 31
        assert details.priority_score == 557
        assert details.primary_file_path == "ptload/src/ptldcli.c"

        query = query_of(responses.calls[0])
        assert query == {"version": ["2024-01-24~experimental"], "project_id": [TEST_PROJECT_ID]}

    @pytest.mark.parametrize("issue_type", ["package_vulnerability", "license", "cloud", ""])
    @responses.activate
    def test_other_types_rejected(self, client, issue_type):
        v2 = IssueV2(id="x", key="k", type=issue_type, org_id=TEST_ORG_ID, project_id=TEST_PROJECT_ID, client=client)

        with pytest.raises(UnsupportedOperation, match="not available") as exc_info:
            v2.get_details()

        assert not isinstance(exc_info.value, ValidationError)

        assert len(responses.calls) == 0


class TestIgnoredIssues:
    """Tests for decoding a project's ignores."""

    def test_both_shapes_decode_alike(self, load_fixture):
        by_path = decode_ignored_issues(load_fixture("ignores_by_path.json"))
        flat = decode_ignored_issues(load_fixture("ignores_flat.json"))

        assert by_path == flat
        ignores = flat[VULN_KEY]
        assert [i.path for i in ignores] == [["*"], ["express > lodash"]]
        assert ignores[0].expires == datetime(2024, 8, 10, 12, 0, tzinfo=timezone.utc)
        assert ignores[1].expires is None
        assert ignores[1].disregard_if_fixable is True

    @pytest.mark.parametrize("fixture", ["ignores_by_path.json", "ignores_flat.json"])
    @responses.activate
    def test_get_ignored(self, project, load_fixture, fixture):
        url = f"{MOCK_API_URL}/v1/org/{TEST_ORG_ID}/project/{TEST_PROJECT_ID}/ignores"
        responses.add(responses.GET, url, json=load_fixture(fixture))

        ignored = project.issues.get_ignored()

        assert list(ignored) == [VULN_KEY]
        assert all(isinstance(i, Ignore) for i in ignored[VULN_KEY])

    def test_empty_response(self):
        assert decode_ignored_issues({}) == {}

    @pytest.mark.parametrize(
        "payload",
        [
            ["not", "an", "object"],
            {VULN_KEY: "not a list"},
            {VULN_KEY: [42]},
            {VULN_KEY: [{"reason": 1, "reasonType": "wont-fix"}]},
        ],
    )
    def test_malformed_payload(self, payload):
        with pytest.raises(DecodeError, match="Failed to parse ignore response body"):
            decode_ignored_issues(payload)
