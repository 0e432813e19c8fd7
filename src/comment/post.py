"""
Entry point for posting the scan report as a pull-request comment.
"""

import argparse
import json
import os
import sys
from typing import List, Optional

from cli.actions import get_input
from comment.github import (
    CommentError,
    GitHubClient,
    post_report_comment,
    pull_request_number_from_env,
    repository_from_env,
)
from comment.render import render_comment
from core.config import split_list
from core.utils import error, info, warn


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Post the baseline scan report as a pull-request comment")
    parser.add_argument("--token", help="GitHub token (default: github-token input or GITHUB_TOKEN)")
    parser.add_argument("--scan-results", metavar="JSON", help="Scan results JSON (default: scan-results input)")
    parser.add_argument("--scan-results-file", metavar="PATH", help="Read scan results JSON from a file")
    parser.add_argument("--critical", metavar="IDS", help="Comma-separated feature ids to mark as failing")
    args = parser.parse_args(argv)

    token = args.token or get_input("github-token") or os.environ.get("GITHUB_TOKEN")
    if not token:
        error("Input required and not supplied: github-token")
        return 1

    raw = args.scan_results or get_input("scan-results")
    if args.scan_results_file:
        try:
            with open(args.scan_results_file, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            error(f"Cannot read {args.scan_results_file}: {e}")
            return 1
    if not raw:
        error("Input required and not supplied: scan-results")
        return 1

    try:
        scan_results = json.loads(raw)
    except json.JSONDecodeError:
        error("❌ Invalid scan-results JSON provided")
        return 1
    if not isinstance(scan_results, dict):
        error("❌ scan-results must be a JSON object")
        return 1

    pull_number = pull_request_number_from_env()
    if pull_number is None:
        warn("⚠️ No pull request detected — skipping PR comment.")
        return 0

    body = render_comment(scan_results, split_list(args.critical or get_input("critical-features")))

    try:
        owner, repo = repository_from_env()
        outcome = post_report_comment(GitHubClient(token), owner, repo, pull_number, body)
    except CommentError as e:
        error(str(e))
        return 1

    if outcome == "updated":
        info("🔁 Updated existing baseline report comment.")
    else:
        info("✅ Posted new baseline report comment.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
