"""
Unit tests for GitHubFileStore.

Tests reads and writes against the in-memory contents API.
"""

import base64
import json
import logging

import pytest
import requests
from unittest.mock import Mock

from academy.errors import ConfigurationError, RemoteFetchError, RemoteWriteError
from academy.storage import GitHubFileStore, decode_content, encode_content
from academy.utils.config import SecureString

from tests.conftest import TEST_REPO, TEST_TOKEN


class TestContentCodec:
    """Test cases for the base64 transport encoding."""

    def test_decode_ignores_embedded_newlines(self):
        """Test the 60-column wrapping the API applies is tolerated."""
        text = json.dumps({"students": [{"id": 1, "name": "김민지" * 20}]})
        wrapped = base64.encodebytes(text.encode("utf-8")).decode("ascii")

        assert "\n" in wrapped
        assert decode_content(wrapped) == {"students": [{"id": 1, "name": "김민지" * 20}]}

    def test_encode_is_pretty_utf8(self):
        """Test Korean text is stored as-is with two-space indentation."""
        encoded = encode_content({"students": [{"name": "김민지"}]})
        text = base64.b64decode(encoded).decode("utf-8")

        assert "김민지" in text
        assert text == json.dumps({"students": [{"name": "김민지"}]}, ensure_ascii=False, indent=2)

    def test_decode_rejects_garbage(self):
        """Test non-JSON payload raises ValueError."""
        payload = base64.b64encode(b"not json").decode("ascii")

        with pytest.raises(ValueError):
            decode_content(payload)

    def test_decode_rejects_non_text(self):
        with pytest.raises(ValueError, match="Expected base64 text, got list"):
            decode_content(["eyJzdHVkZW50cyI6IFtdfQ=="])


class TestGitHubFileStoreRead:
    """Test cases for reading documents."""

    def test_read_returns_parsed_document(self, host, store):
        """Test read decodes the stored document."""
        host.put_document("data/students.json", {"students": [{"id": 1, "name": "김민지"}]})

        data = store.read("data/students.json")

        assert data == {"students": [{"id": 1, "name": "김민지"}]}

    def test_read_sends_auth_headers_and_timeout(self, host, store):
        """Test request carries token, API version and timeout."""
        host.put_document("data/students.json", {"students": []})

        store.read("data/students.json")

        _, path, kwargs = host.calls[0]
        assert path == "data/students.json"
        assert kwargs["headers"]["Authorization"] == f"token {TEST_TOKEN}"
        assert kwargs["headers"]["Accept"] == "application/vnd.github.v3+json"
        assert kwargs["timeout"] == 30
        assert kwargs["params"] is None

    def test_read_with_branch_passes_ref(self, host):
        """Test configured branch is sent as the ref parameter."""
        store = GitHubFileStore(
            token=SecureString(TEST_TOKEN),
            repo=TEST_REPO,
            branch="data",
            session=host,
        )
        host.put_document("data/students.json", {"students": []})

        store.read("data/students.json")

        assert host.calls[0][2]["params"] == {"ref": "data"}

    def test_read_with_version_returns_sha(self, host, store):
        """Test version token matches what the host holds."""
        sha = host.put_document("data/payments.json", {"payments": []})

        document = store.read_with_version("data/payments.json")

        assert document.sha == sha
        assert document.path == "data/payments.json"

    def test_read_missing_token(self, host):
        """Test missing token is a configuration error and nothing is sent."""
        store = GitHubFileStore(token=None, repo=TEST_REPO, session=host)

        with pytest.raises(ConfigurationError) as exc_info:
            store.read("data/students.json")

        assert "GITHUB_TOKEN" in str(exc_info.value)
        assert host.calls == []

    def test_read_missing_repo(self, host):
        """Test missing repository is a configuration error."""
        store = GitHubFileStore(token=SecureString(TEST_TOKEN), repo=None, session=host)

        with pytest.raises(ConfigurationError) as exc_info:
            store.read("data/students.json")

        assert "GITHUB_REPO" in str(exc_info.value)
        assert "GITHUB_TOKEN" not in str(exc_info.value)

    def test_read_not_found(self, store):
        """Test a missing document raises RemoteFetchError with the status."""
        with pytest.raises(RemoteFetchError) as exc_info:
            store.read("data/students.json")

        assert exc_info.value.status_code == 404
        assert exc_info.value.path == "data/students.json"

    def test_read_server_error(self, host, store):
        """Test any non-success status raises RemoteFetchError."""
        host.put_document("data/students.json", {"students": []})
        host.get_status = 502

        with pytest.raises(RemoteFetchError) as exc_info:
            store.read("data/students.json")

        assert exc_info.value.status_code == 502

    def test_read_transport_error(self):
        """Test connection failures are wrapped in RemoteFetchError."""
        session = Mock()
        session.get.side_effect = requests.ConnectionError("connection refused")
        store = GitHubFileStore(token=SecureString(TEST_TOKEN), repo=TEST_REPO, session=session)

        with pytest.raises(RemoteFetchError) as exc_info:
            store.read("data/students.json")

        assert "connection refused" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_read_response_without_content(self):
        """Test a success response with no payload raises RemoteFetchError."""
        response = Mock(ok=True, status_code=200)
        response.json.return_value = {"type": "dir", "sha": "abc"}
        session = Mock()
        session.get.return_value = response
        store = GitHubFileStore(token=SecureString(TEST_TOKEN), repo=TEST_REPO, session=session)

        with pytest.raises(RemoteFetchError):
            store.read("data")

    def test_read_undecodable_content(self):
        """Test a payload that is not JSON raises RemoteFetchError."""
        response = Mock(ok=True, status_code=200)
        response.json.return_value = {
            "content": base64.b64encode(b"<html>").decode("ascii"),
            "sha": "abc",
        }
        session = Mock()
        session.get.return_value = response
        store = GitHubFileStore(token=SecureString(TEST_TOKEN), repo=TEST_REPO, session=session)

        with pytest.raises(RemoteFetchError):
            store.read("data/students.json")

    def test_read_non_text_content(self):
        """Test a malformed content field raises RemoteFetchError."""
        response = Mock(ok=True, status_code=200)
        response.json.return_value = {"content": 12345, "sha": "abc"}
        session = Mock()
        session.get.return_value = response
        store = GitHubFileStore(token=SecureString(TEST_TOKEN), repo=TEST_REPO, session=session)

        with pytest.raises(RemoteFetchError, match="Cannot decode document"):
            store.read("data/students.json")

class TestGitHubFileStoreWrite:
    """Test cases for writing documents."""

    def test_write_creates_new_document_without_sha(self, host, store):
        """Test first write omits the version token."""
        store.write("data/students.json", {"students": []})

        put = host.requests_for("PUT")[0][2]["json"]
        assert "sha" not in put
        assert put["message"] == "Update data/students.json"
        assert host.document("data/students.json") == {"students": []}

    def test_write_existing_sends_current_sha(self, host, store):
        """Test overwrite sends the sha read just before it."""
        sha = host.put_document("data/students.json", {"students": []})

        store.write("data/students.json", {"students": [{"id": 1}]})

        put = host.requests_for("PUT")[0][2]["json"]
        assert put["sha"] == sha
        assert host.document("data/students.json") == {"students": [{"id": 1}]}

    def test_write_is_version_lookup_then_put(self, host, store):
        """Test a write makes exactly two requests."""
        host.put_document("data/students.json", {"students": []})

        store.write("data/students.json", {"students": []})

        assert [c[0] for c in host.calls] == ["GET", "PUT"]
        assert all(c[2]["timeout"] == 30 for c in host.calls)

    def test_write_with_branch(self, host):
        """Test branch is included in the write body."""
        store = GitHubFileStore(
            token=SecureString(TEST_TOKEN),
            repo=TEST_REPO,
            branch="data",
            session=host,
        )

        store.write("data/students.json", {"students": []})

        assert host.requests_for("PUT")[0][2]["json"]["branch"] == "data"

    def test_write_returns_host_metadata(self, host, store):
        """Test the host response body is returned."""
        response = store.write("data/students.json", {"students": []})

        assert response["content"]["sha"] == host.sha("data/students.json")

    def test_write_rejected(self, host, store):
        """Test host rejection raises RemoteWriteError with the status."""
        host.put_document("data/students.json", {"students": []})
        host.put_status = 500

        with pytest.raises(RemoteWriteError) as exc_info:
            store.write("data/students.json", {"students": [{"id": 1}]})

        assert exc_info.value.status_code == 500
        assert host.document("data/students.json") == {"students": []}

    def test_write_transport_error(self):
        """Test connection failure during the write raises RemoteWriteError."""
        session = Mock()
        session.get.return_value = Mock(ok=False, status_code=404)
        session.put.side_effect = requests.Timeout("timed out")
        store = GitHubFileStore(token=SecureString(TEST_TOKEN), repo=TEST_REPO, session=session)

        with pytest.raises(RemoteWriteError):
            store.write("data/students.json", {"students": []})

    def test_write_missing_configuration(self, host, unconfigured_store):
        """Test write without credentials raises before any request."""
        with pytest.raises(ConfigurationError):
            unconfigured_store.write("data/students.json", {"students": []})

        assert host.calls == []

    def test_from_config(self):
        """Test store settings are taken from configuration."""
        config = Mock(
            github_token=SecureString(TEST_TOKEN),
            github_repo=TEST_REPO,
            github_api_url="https://github.example.com/api/v3",
            github_branch="main",
            request_timeout=10,
        )

        store = GitHubFileStore.from_config(config)

        assert store.repo == TEST_REPO
        assert store.branch == "main"
        assert store.timeout == 10
        assert store._contents_url("data/students.json") == (
            f"https://github.example.com/api/v3/repos/{TEST_REPO}/contents/data/students.json"
        )

    def test_from_config_logs_masked_token(self, caplog):
        config = Mock(
            github_token=SecureString(TEST_TOKEN),
            github_repo=TEST_REPO,
            github_api_url="https://api.github.com",
            github_branch=None,
            request_timeout=30,
        )

        with caplog.at_level(logging.DEBUG, logger="academy.storage"):
            GitHubFileStore.from_config(config)

        assert "ghp_********" in caplog.text
        assert TEST_TOKEN not in caplog.text
