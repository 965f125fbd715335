import json

import httpx
import pytest

from combined_heatmap.services.aggregation_service import ContributionAggregator
from combined_heatmap.settings import Settings


def calendar_payload(days: dict[str, int]) -> dict[str, object]:
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {
                        "weeks": [
                            {
                                "contributionDays": [
                                    {"date": day, "contributionCount": count}
                                    for day, count in days.items()
                                ]
                            }
                        ]
                    }
                }
            }
        }
    }


class FakeGitHub:
    """In-memory stand-in for the GitHub GraphQL endpoint."""

    def __init__(self) -> None:
        self.calendars: dict[str, dict[str, int]] = {}
        self.failures: dict[str, int] = {}
        self.requested_logins: list[str] = []
        self.authorization_headers: list[str | None] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        login = body["variables"]["login"]
        self.requested_logins.append(login)
        self.authorization_headers.append(request.headers.get("Authorization"))

        if login in self.failures:
            return httpx.Response(self.failures[login], json={"message": "failed"})
        if login not in self.calendars:
            return httpx.Response(200, json={"data": {"user": None}})
        return httpx.Response(200, json=calendar_payload(self.calendars[login]))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        github_token="test-token",
        github_graphql_url="https://github.test/graphql",
        rate_limit_per_minute=1000,
        sentry_dsn=None,
    )


@pytest.fixture
def aggregator(settings: Settings, fake_github: FakeGitHub) -> ContributionAggregator:
    return ContributionAggregator(settings, transport=fake_github.transport)


@pytest.fixture
def payload_for():
    return calendar_payload
