"""
Pull-request comment rendering (Jinja2) and posting (GitHub REST API).
"""

from comment.render import COMMENT_HEADER, render_comment
from comment.github import CommentError, GitHubClient, post_report_comment

__all__ = [
    "COMMENT_HEADER",
    "render_comment",
    "CommentError",
    "GitHubClient",
    "post_report_comment",
]
