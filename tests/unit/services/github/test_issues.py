"""Tests for failure log publishing."""

import json

import httpx
import pytest

from shipyard.common.exception.exceptions import GitHubAPIError
from shipyard.services.github.api.client import GitHubAPIClient
from shipyard.services.github.api.issues import IssueOperations
from shipyard.services.github.auth.installation_token_manager import InstallationTokenManager
from shipyard.services.github.models.types import Log
from shipyard.services.github.repository.url_parser import RepositoryIdentity

LABEL_URL = "https://api.github.com/repos/acme/widget/labels/AppCenter"
LABELS_URL = "https://api.github.com/repos/acme/widget/labels"
ISSUES_URL = "https://api.github.com/repos/acme/widget/issues"


def _issue_operations(transport) -> IssueOperations:
    client = GitHubAPIClient(
        InstallationTokenManager(transport=transport),
        base_url="https://api.github.com",
        user_agent="shipyard-test",
        transport=transport,
    )
    return IssueOperations(client)


def _github(label_status=200, issue_status=201):
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if request.method == "GET" and url == LABEL_URL:
            return httpx.Response(label_status, json={"name": "AppCenter"})
        if request.method == "POST" and url == LABELS_URL:
            return httpx.Response(201, json=json.loads(request.content))
        if request.method == "POST" and url == ISSUES_URL:
            return httpx.Response(issue_status, json={"id": 1234, "number": 7})
        return httpx.Response(404)

    return handler


@pytest.fixture
def log():
    return Log(title="Build failed", body="```\nerror: missing dependency\n```")


class TestUploadLog:
    """Test IssueOperations.upload_log function."""

    @pytest.mark.asyncio
    async def test_already_published_is_noop(self, static_identity, failing_transport):
        """Test logs with a github_id skip every network call."""
        published = Log(title="Build failed", body="...", githubId=3)

        result = await _issue_operations(failing_transport).upload_log(published, static_identity)

        assert result is published
        assert failing_transport.requests == []

    @pytest.mark.asyncio
    async def test_existing_label_is_reused(self, static_identity, log, recording_transport):
        transport = recording_transport(_github(label_status=200))

        result = await _issue_operations(transport).upload_log(log, static_identity)

        assert [(request.method, str(request.url)) for request in transport.requests] == [
            ("GET", LABEL_URL),
            ("POST", ISSUES_URL),
        ]
        assert json.loads(transport.requests[1].content) == {
            "body": log.body,
            "labels": ["AppCenter"],
            "title": "Build failed",
        }
        assert result.github_id == 1234
        assert log.github_id is None

    @pytest.mark.asyncio
    async def test_missing_label_is_created(self, static_identity, log, recording_transport):
        """Test a 404 label lookup creates the label before filing the issue."""
        transport = recording_transport(_github(label_status=404))

        await _issue_operations(transport).upload_log(log, static_identity)

        assert [(request.method, str(request.url)) for request in transport.requests] == [
            ("GET", LABEL_URL),
            ("POST", LABELS_URL),
            ("POST", ISSUES_URL),
        ]
        assert json.loads(transport.requests[1].content) == {
            "color": "4c158a",
            "description": "Issues related to releasing on AppCenter",
            "name": "AppCenter",
        }

    @pytest.mark.asyncio
    async def test_label_lookup_error_still_creates(self, static_identity, log, recording_transport):
        """Test any label lookup failure is treated as a missing label."""
        transport = recording_transport(_github(label_status=500))

        result = await _issue_operations(transport).upload_log(log, static_identity)

        assert ("POST", LABELS_URL) in [(request.method, str(request.url)) for request in transport.requests]
        assert result.github_id == 1234

    @pytest.mark.asyncio
    async def test_issue_failure_propagates(self, static_identity, log, recording_transport):
        transport = recording_transport(_github(issue_status=410))

        with pytest.raises(GitHubAPIError) as exc_info:
            await _issue_operations(transport).upload_log(log, static_identity)

        assert exc_info.value.status_code == 410

    @pytest.mark.asyncio
    async def test_requests_carry_authorization(self, static_identity, log, recording_transport):
        transport = recording_transport(_github())

        await _issue_operations(transport).upload_log(log, static_identity)

        for request in transport.requests:
            assert request.headers["authorization"] == "Bearer tok_abc"
            assert request.headers["user-agent"] == "shipyard-test"

    @pytest.mark.asyncio
    async def test_no_credentials_sends_no_authorization(self, log, recording_transport):
        """Test requests for a credential-less URL omit the Authorization header."""
        transport = recording_transport(_github())
        identity = RepositoryIdentity(owner="acme", name="widget")

        await _issue_operations(transport).upload_log(log, identity)

        assert transport.requests
        for request in transport.requests:
            assert "authorization" not in request.headers
