"""Comment Enforcement — tests for pure body, permission, and thread-shape rules.

Tests cover:
    - check_body: blank rejected, 1000 accepted, 1001 rejected
    - can_edit / can_delete: author or admin only
    - resolve_comment_body: "content" wins over "body"
    - Reply rules: same content, one level deep
"""

from types import SimpleNamespace

from media_platform.core.domain_types import COMMENT_BODY_MAX_LENGTH
from media_platform.core.enforce_comments import (
    is_reply, is_root_comment, can_edit, can_delete, resolve_comment_body,
    check_body, check_not_self_parent, check_parent_same_content,
    check_reply_depth, validate_new_comment,
)


def _comment(id=1, user_id=10, content_id=42, parent_id=None):
    return SimpleNamespace(
        id=id, user_id=user_id, content_id=content_id, parent_id=parent_id,
    )


# ─── predicates ──────────────────────────────────────────────────

def test_root_and_reply_predicates():
    root = _comment()
    reply = _comment(id=2, parent_id=1)
    assert is_root_comment(root) and not is_reply(root)
    assert is_reply(reply) and not is_root_comment(reply)


def test_author_can_edit_and_delete():
    comment = _comment(user_id=10)
    assert can_edit(comment, 10, "user")
    assert can_delete(comment, 10, "user")


def test_admin_can_edit_and_delete_any_comment():
    comment = _comment(user_id=10)
    assert can_edit(comment, 99, "admin")
    assert can_delete(comment, 99, "admin")


def test_other_user_cannot_edit_or_delete():
    comment = _comment(user_id=10)
    assert not can_edit(comment, 11, "user")
    assert not can_delete(comment, 11, "moderator")


# ─── resolve_comment_body ────────────────────────────────────────

def test_resolve_prefers_content():
    assert resolve_comment_body("from content", "from body") == "from content"


def test_resolve_falls_back_to_body():
    assert resolve_comment_body(None, "from body") == "from body"


def test_resolve_returns_none_when_both_absent():
    assert resolve_comment_body(None, None) is None


# ─── check_body ──────────────────────────────────────────────────

def test_body_at_limit_accepted():
    assert check_body("x" * COMMENT_BODY_MAX_LENGTH) is None


def test_body_over_limit_rejected():
    error = check_body("x" * (COMMENT_BODY_MAX_LENGTH + 1))
    assert error is not None
    assert error.field == "body"
    assert error.http_status == 400


def test_blank_body_rejected():
    for body in (None, "", " \n\t"):
        assert check_body(body) is not None


# ─── thread shape ────────────────────────────────────────────────

def test_self_parent_guard():
    assert check_not_self_parent(5, 5) is not None
    assert check_not_self_parent(5, 4) is None
    assert check_not_self_parent(None, 4) is None


def test_parent_on_other_content_rejected():
    parent = _comment(content_id=41)
    assert check_parent_same_content(parent, 42) is not None
    assert check_parent_same_content(parent, 41) is None


def test_reply_to_reply_rejected():
    reply = _comment(id=2, parent_id=1)
    error = check_reply_depth(reply)
    assert error is not None
    assert error.field == "parent_id"


def test_validate_new_comment_checks_body_before_parent():
    bad_parent = _comment(content_id=41)
    error = validate_new_comment("", bad_parent, 42)
    assert error.field == "body"


def test_validate_new_comment_accepts_reply_to_root():
    assert validate_new_comment("Nice", _comment(), 42) is None


def test_validate_new_comment_accepts_root_comment():
    assert validate_new_comment("Nice", None, 42) is None
