from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx


CONTRIBUTION_QUERY = """
query($login: String!) {
  user(login: $login) {
    contributionsCollection {
      contributionCalendar {
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""

USER_AGENT = "combined-heatmap"


def build_headers(token: str | None) -> dict[str, str]:
    headers = {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def parse_contribution_calendar(payload: Any) -> dict[str, int]:
    """Flatten a GraphQL contributionCalendar response into date -> count."""

    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    if payload.get("errors"):
        raise ValueError("GitHub GraphQL returned errors")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ValueError("GitHub user not found")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    series: dict[str, int] = {}
    for week in weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue
        for item in contribution_days:
            if not isinstance(item, Mapping):
                continue
            raw_date = item.get("date")
            raw_count = item.get("contributionCount")
            if not isinstance(raw_date, str) or not isinstance(raw_count, int):
                continue

            try:
                parsed_day = date.fromisoformat(raw_date)
            except ValueError:
                continue

            series[parsed_day.isoformat()] = max(0, raw_count)

    return series


async def fetch_contribution_series(
    client: httpx.AsyncClient,
    username: str,
    token: str | None,
    graphql_url: str,
) -> dict[str, int]:
    """Fetch the contribution calendar of one user from GitHub GraphQL API."""

    response = await client.post(
        graphql_url,
        json={"query": CONTRIBUTION_QUERY, "variables": {"login": username}},
        headers=build_headers(token),
    )
    response.raise_for_status()
    return parse_contribution_calendar(response.json())
