"""Comment Rule Enforcement — body, authorship, and thread-shape invariants.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return an error instance on violation, None on success
    - can_edit / can_delete: author or admin, nothing else
    - Threads are one level deep: a reply's parent must be a root comment
      on the same content

Design Decisions:
    - Permission is checked before body validation in the shell, so a
      non-author gets PermissionDenied regardless of input validity
    - resolve_comment_body is the single boundary rule for clients that send
      "content" instead of "body": "content" wins when both are present
"""

from media_platform.core.domain_types import (
    COMMENT_BODY_MAX_LENGTH, MAX_COMMENT_DEPTH, UserRole,
)
from media_platform.core.errors import DomainValidationError, MediaPlatformError
from media_platform.core.repository_protocols import CommentLike


# --- Predicates ---------------------------------------------------------------

def is_reply(comment: CommentLike) -> bool:
    return comment.parent_id is not None


def is_root_comment(comment: CommentLike) -> bool:
    return comment.parent_id is None


def can_edit(comment: CommentLike, caller_id: int, caller_role: str) -> bool:
    return comment.user_id == caller_id or caller_role == UserRole.ADMIN


def can_delete(comment: CommentLike, caller_id: int, caller_role: str) -> bool:
    return comment.user_id == caller_id or caller_role == UserRole.ADMIN


# --- Boundary normalization ---------------------------------------------------

def resolve_comment_body(content: str | None, body: str | None) -> str | None:
    """Pick the comment text from a payload carrying "content" and/or "body"."""
    if content is not None:
        return content
    return body


# --- Checks -------------------------------------------------------------------

def check_body(body: str | None) -> DomainValidationError | None:
    """Body is required (non-blank) and at most COMMENT_BODY_MAX_LENGTH characters."""
    if body is None or not body.strip():
        return DomainValidationError("Comment body is required", "body")
    if len(body) > COMMENT_BODY_MAX_LENGTH:
        return DomainValidationError(
            f"Comment body must be at most {COMMENT_BODY_MAX_LENGTH} characters "
            f"(got {len(body)})",
            "body",
        )
    return None


def check_not_self_parent(
    comment_id: int | None, parent_id: int | None,
) -> DomainValidationError | None:
    """Only reachable once a comment has an id; guards any future re-parenting path."""
    if comment_id is not None and parent_id is not None and comment_id == parent_id:
        return DomainValidationError(
            "A comment cannot be its own parent", "parent_id",
        )
    return None


def check_parent_same_content(
    parent: CommentLike, content_id: int,
) -> DomainValidationError | None:
    if parent.content_id != content_id:
        return DomainValidationError(
            f"Parent comment {parent.id} belongs to a different content",
            "parent_id",
        )
    return None


def check_reply_depth(parent: CommentLike) -> DomainValidationError | None:
    """Replies may only hang off root comments (MAX_COMMENT_DEPTH == 1)."""
    if is_reply(parent):
        return DomainValidationError(
            f"Comment {parent.id} is already a reply; "
            f"threads are limited to {MAX_COMMENT_DEPTH} level",
            "parent_id",
        )
    return None


# --- Composite validators -----------------------------------------------------

def validate_reply_parent(
    parent: CommentLike, content_id: int,
) -> MediaPlatformError | None:
    """Validate an existing parent comment for a new reply."""
    return (
        check_parent_same_content(parent, content_id)
        or check_reply_depth(parent)
    )


def validate_new_comment(
    body: str | None, parent: CommentLike | None, content_id: int,
) -> MediaPlatformError | None:
    """Validate everything about a new comment that needs no further IO."""
    error = check_body(body)
    if error:
        return error
    if parent is not None:
        return validate_reply_parent(parent, content_id)
    return None
