"""
Basic GitHub HTTP Adapter Usage Examples

Demonstrates requests, authentication, error handling and logging.
"""

import os

from github_http import HttpClientAdapter, LoggingConfig, load_options_from_env
from github_http.core.exceptions import ApiError, NotFoundError, RateLimitExceededError, TransportError


def basic_get_request():
    """Simple GET request."""
    print("\n=== Basic GET Request ===")

    with HttpClientAdapter() as adapter:
        response = adapter.get("repos/KnpLabs/php-github-api")

        print(f"Status: {response.status_code}")
        print(f"Full name: {response.content['full_name']}")
        print(f"Rate limit remaining: {response.rate_limit.remaining}")


def paginated_request():
    """Query parameters and Link header pagination."""
    print("\n=== Pagination ===")

    with HttpClientAdapter() as adapter:
        response = adapter.get("users/octocat/repos", {"per_page": 5})

        for repo in response.content:
            print(f"  - {repo['name']}")
        print(f"Pages: {response.pagination}")


def authenticated_request():
    """Token authentication taken from GITHUB_TOKEN."""
    print("\n=== Authenticated Request ===")

    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        print("GITHUB_TOKEN is not set, skipping")
        return

    with HttpClientAdapter({"api_version": "v3"}) as adapter:
        adapter.authenticate("token", token)
        response = adapter.get("user")
        print(f"Logged in as: {response.content['login']}")


def error_handling():
    """Typed errors."""
    print("\n=== Error Handling ===")

    with HttpClientAdapter() as adapter:
        try:
            adapter.get("repos/this-user-does-not-exist/nothing")
        except NotFoundError as e:
            print(f"Not found: {e.status_code} ({e.kind.value})")
        except RateLimitExceededError as e:
            print(f"Rate limit exceeded, resets at {e.reset}")
        except ApiError as e:
            print(f"API error: {e}")
        except TransportError as e:
            print(f"Network problem: {e} (retryable={e.retryable})")


def logging_and_environment():
    """Options from GITHUB_HTTP_* variables plus JSON logs on stdout."""
    print("\n=== Environment + Logging ===")

    options = load_options_from_env(logging=LoggingConfig.create(level="DEBUG", format="json"))

    with HttpClientAdapter(options) as adapter:
        adapter.get("rate_limit")


if __name__ == "__main__":
    basic_get_request()
    paginated_request()
    authenticated_request()
    error_handling()
    logging_and_environment()
