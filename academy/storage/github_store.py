"""
JSON document store backed by the GitHub contents API.

Each document is a file in a repository. Reads decode the base64 payload
the API returns; writes fetch the file's current blob sha first and send
it back with the new content, which the host requires to overwrite an
existing file. The two requests of a write are not atomic: a concurrent
writer can land between them (see DocumentRepository.save).
"""

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from ..errors import ConfigurationError, RemoteFetchError, RemoteWriteError
from ..utils.config import Config, SecureString
from ..utils.logger import mask_token
from .interfaces import DocumentStore


logger = logging.getLogger(__name__)


@dataclass
class VersionedDocument:
    """
    Parsed document content together with its version token.

    Attributes:
        path: Repository path of the document
        content: Parsed JSON value
        sha: Blob sha identifying this revision
    """

    path: str
    content: Any
    sha: Optional[str]


def encode_content(content: Any) -> str:
    """Serialize a JSON value and base64-encode it for transport."""
    text = json.dumps(content, ensure_ascii=False, indent=2)
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def decode_content(payload: str) -> Any:
    """
    Decode a base64 transport payload into a JSON value.

    The API wraps base64 at 60 columns; the embedded newlines are ignored.

    Raises:
        ValueError: If the payload is not base64 text, UTF-8 or JSON
    """
    if not isinstance(payload, str):
        raise ValueError(f"Expected base64 text, got {type(payload).__name__}")
    raw = base64.b64decode(payload)
    return json.loads(raw.decode('utf-8'))


class GitHubFileStore(DocumentStore):
    """
    Read and overwrite JSON documents in a GitHub repository.

    Credentials are checked on every call rather than at construction, so
    a store can be built before configuration is complete.

    Examples:
        >>> store = GitHubFileStore.from_config(config)
        >>> data = store.read("data/students.json")
        >>> data["students"].append({"id": 4, "name": "이서준", ...})
        >>> store.write("data/students.json", data)
    """

    ACCEPT_HEADER = "application/vnd.github.v3+json"

    def __init__(
        self,
        token: Optional[SecureString],
        repo: Optional[str],
        api_url: str = Config.DEFAULT_API_URL,
        branch: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the store.

        Args:
            token: Access token for the contents API
            repo: Repository in "owner/name" form
            api_url: Contents API base URL
            branch: Branch to read and write (repository default if None)
            timeout: Per-request timeout in seconds
            session: HTTP session to use (a new one if None)
        """
        self._token = token
        self._repo = repo
        self.api_url = api_url.rstrip('/')
        self.branch = branch
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(
        cls,
        config: Config,
        session: Optional[requests.Session] = None
    ) -> 'GitHubFileStore':
        """Build a store from application configuration."""
        token = config.github_token
        logger.debug(
            f"Remote store: repo={config.github_repo} branch={config.github_branch or 'default'} "
            f"token={mask_token(token.get_value() if token else None)}"
        )
        return cls(
            token=token,
            repo=config.github_repo,
            api_url=config.github_api_url,
            branch=config.github_branch,
            timeout=config.request_timeout,
            session=session,
        )

    @property
    def repo(self) -> Optional[str]:
        return self._repo

    def _require_settings(self):
        missing = []
        if not self._token or not self._token.get_value():
            missing.append("GITHUB_TOKEN")
        if not self._repo:
            missing.append("GITHUB_REPO")
        if missing:
            raise ConfigurationError(
                f"Remote store is not configured: {', '.join(missing)} not set. "
                f"Check your environment or .env file."
            )

    def _contents_url(self, path: str) -> str:
        return f"{self.api_url}/repos/{self._repo}/contents/{quote(path.lstrip('/'))}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"token {self._token.get_value()}",
            "Accept": self.ACCEPT_HEADER,
        }

    def _params(self) -> Optional[Dict[str, str]]:
        return {"ref": self.branch} if self.branch else None

    def _get(self, path: str) -> requests.Response:
        return self.session.get(
            self._contents_url(path),
            headers=self._headers(),
            params=self._params(),
            timeout=self.timeout,
        )

    def read_with_version(self, path: str) -> VersionedDocument:
        """
        Fetch a document and its version token.

        Args:
            path: Repository path of the document

        Returns:
            VersionedDocument with the parsed content and blob sha

        Raises:
            ConfigurationError: If token or repository is not set
            RemoteFetchError: If the host fails or the payload is unusable
        """
        self._require_settings()
        logger.debug(f"Fetching document: {path}")

        try:
            response = self._get(path)
        except requests.RequestException as e:
            raise RemoteFetchError(f"Request failed: {e}", path=path) from e

        if not response.ok:
            logger.error(
                f"Fetch of {path} failed: {response.status_code} {response.text[:200]}"
            )
            raise RemoteFetchError(
                f"Host returned {response.reason or 'an error'}",
                path=path,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteFetchError(
                "Response is not JSON", path=path, status_code=response.status_code
            ) from e

        payload = data.get("content") if isinstance(data, dict) else None
        if not payload:
            logger.error(f"No content payload in response for {path}")
            raise RemoteFetchError(
                "Response has no content payload",
                path=path,
                status_code=response.status_code,
            )

        try:
            content = decode_content(payload)
        except (TypeError, ValueError) as e:
            raise RemoteFetchError(f"Cannot decode document: {e}", path=path) from e

        return VersionedDocument(path=path, content=content, sha=data.get("sha"))

    def read(self, path: str) -> Any:
        """
        Fetch a document and return its parsed JSON value.

        Raises:
            ConfigurationError: If token or repository is not set
            RemoteFetchError: If the host fails or the payload is unusable
        """
        return self.read_with_version(path).content

    def current_version(self, path: str) -> Optional[str]:
        """
        Look up the blob sha of a document.

        Returns:
            The sha, or None if the document does not exist yet (any
            non-success answer is treated as "create new")

        Raises:
            ConfigurationError: If token or repository is not set
            RemoteWriteError: If the request cannot be sent
        """
        self._require_settings()

        try:
            response = self._get(path)
        except requests.RequestException as e:
            raise RemoteWriteError(f"Version lookup failed: {e}", path=path) from e

        if not response.ok:
            logger.debug(f"No current version of {path} ({response.status_code})")
            return None

        try:
            return response.json().get("sha")
        except (ValueError, AttributeError):
            return None

    def write(self, path: str, content: Any) -> Dict[str, Any]:
        """
        Overwrite (or create) a document.

        Args:
            path: Repository path of the document
            content: JSON-serializable value to store

        Returns:
            The host's response body

        Raises:
            ConfigurationError: If token or repository is not set
            RemoteWriteError: If the host rejects the write
        """
        self._require_settings()

        sha = self.current_version(path)

        body: Dict[str, Any] = {
            "message": f"Update {path}",
            "content": encode_content(content),
        }
        if sha:
            body["sha"] = sha
        if self.branch:
            body["branch"] = self.branch

        logger.info(f"Writing document {path} (base sha: {sha or 'new file'})")

        try:
            response = self.session.put(
                self._contents_url(path),
                headers=self._headers(),
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteWriteError(f"Request failed: {e}", path=path) from e

        if not response.ok:
            logger.error(
                f"Write of {path} failed: {response.status_code} {response.text[:200]}"
            )
            raise RemoteWriteError(
                f"Host rejected write: {response.reason or 'error'}",
                path=path,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError:
            return {}
