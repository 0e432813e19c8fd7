"""
Minimal GitHub REST client for creating or updating the report comment.
"""

import json
import os
from typing import Any, Dict, List, Optional, Tuple

import requests

from comment.render import COMMENT_HEADER
from core.utils import debug

GITHUB_API_URL = "https://api.github.com"
PAGE_SIZE = 100


class CommentError(Exception):
    """A GitHub API call failed or the Actions context is incomplete."""


class GitHubClient:
    """Issue comment endpoints of the GitHub REST API."""

    def __init__(
        self,
        token: str,
        api_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
    ):
        self._api_url = (api_url or os.environ.get("GITHUB_API_URL") or GITHUB_API_URL).rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout
        self._headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self._api_url}{path}"
        try:
            response = self._session.request(method, url, headers=self._headers, timeout=self._timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise CommentError(f"{method} {path} failed: {e}") from e
        if response.status_code >= 400:
            raise CommentError(f"{method} {path} returned {response.status_code}: {response.text[:200]}")
        if not response.content:
            return None
        return response.json()

    def list_comments(self, owner: str, repo: str, issue_number: int) -> List[Dict[str, Any]]:
        comments: List[Dict[str, Any]] = []
        page = 1
        while True:
            batch = self._request(
                "GET",
                f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
                params={"per_page": PAGE_SIZE, "page": page},
            ) or []
            comments.extend(batch)
            if len(batch) < PAGE_SIZE:
                return comments
            page += 1

    def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )

    def update_comment(self, owner: str, repo: str, comment_id: int, body: str) -> Dict[str, Any]:
        return self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
            json={"body": body},
        )


def find_report_comment(comments: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """The bot comment left by a previous run, if any."""
    for comment in comments:
        user = comment.get("user") or {}
        body = comment.get("body") or ""
        if user.get("type") == "Bot" and body.startswith(COMMENT_HEADER):
            return comment
    return None


def post_report_comment(client: GitHubClient, owner: str, repo: str, pull_number: int, body: str) -> str:
    """Update the previous report comment or create a new one. Returns 'updated' or 'created'."""
    existing = find_report_comment(client.list_comments(owner, repo, pull_number))
    if existing is not None:
        debug(f"Updating comment {existing['id']} on #{pull_number}")
        client.update_comment(owner, repo, existing["id"], body)
        return "updated"
    client.create_comment(owner, repo, pull_number, body)
    return "created"


def repository_from_env() -> Tuple[str, str]:
    """(owner, repo) from GITHUB_REPOSITORY."""
    slug = os.environ.get("GITHUB_REPOSITORY", "")
    owner, _, repo = slug.partition("/")
    if not owner or not repo:
        raise CommentError("GITHUB_REPOSITORY is not set (expected 'owner/repo')")
    return owner, repo


def pull_request_number_from_env() -> Optional[int]:
    """Pull request number from the Actions event payload; None outside pull_request events."""
    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        return None
    try:
        with open(event_path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        debug(f"Cannot read event payload {event_path}: {e}")
        return None
    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    if not isinstance(pull_request, dict):
        return None
    number = pull_request.get("number")
    return number if isinstance(number, int) else None
