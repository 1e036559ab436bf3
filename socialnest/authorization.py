"""
Ownership checks applied before every post and comment mutation.

Callers pass a freshly loaded (row-locked) resource; nothing is cached between
requests.
"""
from __future__ import annotations

import uuid

from socialnest.exceptions import NotCommentAuthor, NotPostOwner
from socialnest.posts.models import Post


def assert_post_owner(post: Post, account_id: uuid.UUID) -> None:
    if post.account_id != account_id:
        raise NotPostOwner()


def assert_comment_author(comment: dict, account_id: uuid.UUID) -> None:
    if comment.get("user") != str(account_id):
        raise NotCommentAuthor()
