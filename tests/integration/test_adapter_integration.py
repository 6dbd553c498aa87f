"""
Integration tests: HttpClientAdapter with the default requests transport,
HTTP layer mocked with responses.
"""

import base64
import json

import pytest
import requests
import responses

from github_http import HttpClientAdapter
from github_http.core.exceptions import (
    ErrorKind,
    NetworkConnectionError,
    NotFoundError,
    RateLimitExceededError,
    ValidationFailedError,
)
from github_http.core.logging import LoggingConfig
from github_http.core.transport import RequestsTransport

API = "https://api.github.com"


@pytest.fixture
def github():
    adapter = HttpClientAdapter()
    yield adapter
    adapter.close()


class TestAdapterOverRequests:

    def test_default_transport(self, github):
        assert isinstance(github.transport, RequestsTransport)
        assert github.transport.timeout == 10
        assert github.transport.verify_ssl is False

    def test_get_with_default_headers(self, github, mock_responses):
        mock_responses.add(responses.GET, f"{API}/repos/KnpLabs/php-github-api",
                           json={"full_name": "KnpLabs/php-github-api"})

        response = github.get("repos/KnpLabs/php-github-api")

        assert response.content["full_name"] == "KnpLabs/php-github-api"
        sent = mock_responses.calls[0].request
        assert sent.headers["Accept"] == "application/vnd.github.beta+json"
        assert sent.headers["User-Agent"].startswith("github-http-adapter")
        assert sent.body is None

    def test_get_parameters_in_query(self, github, mock_responses):
        mock_responses.add(responses.GET, f"{API}/users/octocat/repos", json=[])

        github.get("users/octocat/repos", {"page": 2, "per_page": 50})

        assert mock_responses.calls[0].request.url == f"{API}/users/octocat/repos?page=2&per_page=50"

    def test_post_parameters_in_body(self, github, mock_responses):
        mock_responses.add(responses.POST, f"{API}/user/repos", status=201, json={"id": 7})

        response = github.post("user/repos", {"name": "hello-world", "private": False})

        assert response.status_code == 201
        sent = mock_responses.calls[0].request
        assert json.loads(sent.body) == {"name": "hello-world", "private": False}
        assert sent.headers["Content-Type"] == "application/json"

    def test_token_auth(self, github, mock_responses):
        mock_responses.add(responses.GET, f"{API}/user", json={"login": "octocat"})
        github.authenticate("token", "ghp_abc")

        github.get("user")

        assert mock_responses.calls[0].request.headers["Authorization"] == "token ghp_abc"

    def test_basic_auth(self, github, mock_responses):
        mock_responses.add(responses.GET, f"{API}/user", json={})
        github.authenticate("basic", "octocat", "secret")

        github.get("user")

        expected = base64.b64encode(b"octocat:secret").decode("ascii")
        assert mock_responses.calls[0].request.headers["Authorization"] == f"Basic {expected}"

    def test_client_id_auth(self, github, mock_responses):
        mock_responses.add(responses.GET, f"{API}/users/octocat", json={})
        github.authenticate("client_id", "cid", "csecret")

        github.get("users/octocat", {"page": 1})

        sent = mock_responses.calls[0].request
        assert sent.url == f"{API}/users/octocat?page=1&client_id=cid&client_secret=csecret"
        assert "Authorization" not in sent.headers
        assert github.get_last_request().url == sent.url

    def test_pagination_and_rate_limit(self, github, mock_responses):
        mock_responses.add(
            responses.GET,
            f"{API}/users/octocat/repos",
            json=[],
            headers={
                "Link": f'<{API}/users/octocat/repos?page=2>; rel="next", <{API}/users/octocat/repos?page=5>; rel="last"',
                "X-RateLimit-Limit": "60",
                "X-RateLimit-Remaining": "59",
            },
        )

        response = github.get("users/octocat/repos")

        assert response.pagination == {
            "next": f"{API}/users/octocat/repos?page=2",
            "last": f"{API}/users/octocat/repos?page=5",
        }
        assert response.rate_limit.remaining == 59

    def test_not_found(self, github, mock_responses):
        mock_responses.add(responses.GET, f"{API}/repos/nobody/nothing", status=404,
                           json={"message": "Not Found"})

        with pytest.raises(NotFoundError) as exc_info:
            github.get("repos/nobody/nothing")

        assert exc_info.value.status_code == 404
        assert github.get_last_response() is None

    def test_validation_failed(self, github, mock_responses):
        mock_responses.add(
            responses.POST, f"{API}/user/repos", status=422,
            json={"message": "Validation Failed",
                  "errors": [{"resource": "Repository", "code": "already_exists", "field": "name"}]},
        )

        with pytest.raises(ValidationFailedError) as exc_info:
            github.post("user/repos", {"name": "taken"})

        assert exc_info.value.errors[0]["code"] == "already_exists"

    def test_rate_limit_exceeded(self, github, mock_responses):
        mock_responses.add(
            responses.GET, f"{API}/user", status=403,
            json={"message": "API rate limit exceeded"},
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )

        with pytest.raises(RateLimitExceededError) as exc_info:
            github.get("user")

        exc = exc_info.value
        assert exc.limit == 5000
        assert exc.reset == 1700000000
        assert exc.retryable is True

    def test_connection_failure(self, github, mock_responses):
        mock_responses.add(responses.GET, f"{API}/user",
                           body=requests.exceptions.ConnectionError("connection refused"))

        with pytest.raises(NetworkConnectionError) as exc_info:
            github.get("user")

        assert exc_info.value.kind is ErrorKind.TRANSPORT
        assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)


class TestAdapterLogging:

    def test_exchange_logged_without_secrets(self, tmp_path, mock_responses):
        log_file = tmp_path / "adapter.log"
        logging_config = LoggingConfig.create(
            level="DEBUG", format="json",
            enable_console=False, enable_file=True, file_path=str(log_file),
        )
        mock_responses.add(responses.GET, f"{API}/user", json={})
        mock_responses.add(responses.GET, f"{API}/missing", status=404, json={"message": "Not Found"})

        with HttpClientAdapter({"logging": logging_config}) as adapter:
            adapter.authenticate("client_id", "cid", "csecret")
            adapter.get("user")
            with pytest.raises(NotFoundError):
                adapter.get("missing")

        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        messages = [record["message"] for record in records]

        assert messages == ["Request started", "Request completed", "Request started", "Request failed"]
        assert all("correlation_id" in record for record in records)
        assert records[1]["status_code"] == 200
        assert records[3]["error_type"] == "NotFoundError"
        assert "csecret" not in log_file.read_text(encoding="utf-8")

    def test_request_headers_logged_masked(self, tmp_path, mock_responses):
        log_file = tmp_path / "adapter.log"
        logging_config = LoggingConfig.create(
            level="DEBUG", format="json",
            enable_console=False, enable_file=True, file_path=str(log_file),
        )
        mock_responses.add(responses.GET, f"{API}/user", json={})

        with HttpClientAdapter({"logging": logging_config}) as adapter:
            adapter.set_headers({"Authorization": "token ghp_leaked"})
            adapter.get("user")

        started = json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])

        assert started["message"] == "Request started"
        assert "Authorization: ***REDACTED***" in started["headers"]
        assert "Accept: application/vnd.github.beta+json" in started["headers"]
        assert "ghp_leaked" not in log_file.read_text(encoding="utf-8")
        assert mock_responses.calls[0].request.headers["Authorization"] == "token ghp_leaked"
