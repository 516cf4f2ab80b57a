"""Comment Manager — tests for thread writes, permissions, and listings.

Tests cover:
    - Scenario C: 1001-character body rejected, exactly 1000 accepted
    - Existence: missing content, author, or parent → ResourceNotFoundError
    - Thread shape: replies on the same content only, one level deep
    - Permission checked before validation: non-author with an invalid body
      still gets PermissionDeniedError
    - Admin may edit and delete any comment
    - update bumps updated_at even when the body is unchanged
    - Deleting a root removes its replies
    - list_by_content pages root comments with reply previews; list_replies
      returns replies oldest first
"""

import pytest
from sqlalchemy import select, func

from media_platform.core.domain_types import REPLY_PREVIEW_LIMIT
from media_platform.core.errors import (
    DomainValidationError, PermissionDeniedError, ResourceNotFoundError,
)
from media_platform.models import Comment
from media_platform.services.comment_manager import CommentManager

ALICE_ID = 1
BOB_ID = 2
ADMIN_ID = 3
ARTICLE_ID = 41
CONTENT_42_ID = 42


@pytest.fixture
async def manager(test_db, seed):
    return CommentManager(test_db)


@pytest.fixture
async def root_comment(manager):
    return await manager.create(ALICE_ID, CONTENT_42_ID, "First!")


async def _comment_count(db) -> int:
    result = await db.execute(select(func.count(Comment.id)))
    return result.scalar_one()


# ─── Scenario C ──────────────────────────────────────────────────

async def test_body_of_1001_characters_rejected(manager, test_db):
    with pytest.raises(DomainValidationError) as exc:
        await manager.create(ALICE_ID, CONTENT_42_ID, "x" * 1001)
    assert exc.value.field == "body"
    assert await _comment_count(test_db) == 0


async def test_body_of_1000_characters_accepted(manager):
    comment = await manager.create(ALICE_ID, CONTENT_42_ID, "x" * 1000)
    assert comment.id is not None
    assert len(comment.body) == 1000
    assert comment.created_at is not None


async def test_blank_body_rejected(manager):
    with pytest.raises(DomainValidationError):
        await manager.create(ALICE_ID, CONTENT_42_ID, "   ")


# ─── Existence ───────────────────────────────────────────────────

async def test_missing_content(manager):
    with pytest.raises(ResourceNotFoundError) as exc:
        await manager.create(ALICE_ID, 999, "Hello")
    assert exc.value.resource_type == "Content"


async def test_missing_author(manager):
    with pytest.raises(ResourceNotFoundError) as exc:
        await manager.create(999, CONTENT_42_ID, "Hello")
    assert exc.value.resource_type == "User"


async def test_missing_parent(manager):
    with pytest.raises(ResourceNotFoundError) as exc:
        await manager.create(ALICE_ID, CONTENT_42_ID, "Hello", parent_id=999)
    assert exc.value.resource_type == "Parent comment"


# ─── Thread shape ────────────────────────────────────────────────

async def test_reply_to_root(manager, root_comment):
    reply = await manager.create(BOB_ID, CONTENT_42_ID, "Second", root_comment.id)
    assert reply.parent_id == root_comment.id


async def test_reply_on_other_content_rejected(manager, root_comment):
    with pytest.raises(DomainValidationError) as exc:
        await manager.create(BOB_ID, ARTICLE_ID, "Wrong place", root_comment.id)
    assert exc.value.field == "parent_id"


async def test_reply_to_reply_rejected(manager, root_comment):
    reply = await manager.create(BOB_ID, CONTENT_42_ID, "Second", root_comment.id)
    with pytest.raises(DomainValidationError):
        await manager.create(ALICE_ID, CONTENT_42_ID, "Third", reply.id)


# ─── Permissions ─────────────────────────────────────────────────

async def test_author_updates_body(manager, root_comment):
    updated = await manager.update(root_comment.id, ALICE_ID, "user", "Edited")
    assert updated.body == "Edited"


async def test_update_with_same_body_bumps_updated_at(manager, root_comment):
    before = root_comment.updated_at
    updated = await manager.update(root_comment.id, ALICE_ID, "user", "First!")
    assert updated.body == "First!"
    assert updated.updated_at > before


async def test_non_author_denied_even_with_invalid_body(manager, root_comment):
    with pytest.raises(PermissionDeniedError):
        await manager.update(root_comment.id, BOB_ID, "user", "x" * 5000)
    with pytest.raises(PermissionDeniedError):
        await manager.update(root_comment.id, BOB_ID, "user", "")


async def test_author_update_with_invalid_body_rejected(manager, root_comment):
    with pytest.raises(DomainValidationError):
        await manager.update(root_comment.id, ALICE_ID, "user", "x" * 1001)


async def test_admin_edits_and_deletes_any_comment(manager, root_comment, test_db):
    updated = await manager.update(root_comment.id, ADMIN_ID, "admin", "Moderated")
    assert updated.body == "Moderated"
    await manager.delete(root_comment.id, ADMIN_ID, "admin")
    assert await _comment_count(test_db) == 0


async def test_non_author_cannot_delete(manager, root_comment, test_db):
    with pytest.raises(PermissionDeniedError):
        await manager.delete(root_comment.id, BOB_ID, "user")
    assert await _comment_count(test_db) == 1


async def test_update_missing_comment(manager):
    with pytest.raises(ResourceNotFoundError):
        await manager.update(999, ALICE_ID, "user", "Hello")


# ─── Cascade ─────────────────────────────────────────────────────

async def test_delete_root_removes_replies(manager, root_comment, test_db):
    await manager.create(BOB_ID, CONTENT_42_ID, "Reply 1", root_comment.id)
    await manager.create(ALICE_ID, CONTENT_42_ID, "Reply 2", root_comment.id)
    other = await manager.create(BOB_ID, CONTENT_42_ID, "Unrelated root")

    await manager.delete(root_comment.id, ALICE_ID, "user")

    result = await test_db.execute(select(Comment.id))
    assert list(result.scalars().all()) == [other.id]


async def test_delete_reply_keeps_root(manager, root_comment, test_db):
    reply = await manager.create(BOB_ID, CONTENT_42_ID, "Reply", root_comment.id)
    await manager.delete(reply.id, BOB_ID, "user")
    assert await manager.get(root_comment.id) is not None
    with pytest.raises(ResourceNotFoundError):
        await manager.get(reply.id)


# ─── Listings ────────────────────────────────────────────────────

async def test_list_by_content_returns_roots_with_reply_preview(manager, root_comment):
    for i in range(REPLY_PREVIEW_LIMIT + 2):
        await manager.create(BOB_ID, CONTENT_42_ID, f"Reply {i}", root_comment.id)
    await manager.create(ALICE_ID, ARTICLE_ID, "Elsewhere")

    page = await manager.list_by_content(CONTENT_42_ID)

    assert page.total == 1
    assert page.comment_count == REPLY_PREVIEW_LIMIT + 3
    thread = page.items[0]
    assert thread.comment.id == root_comment.id
    assert len(thread.replies) == REPLY_PREVIEW_LIMIT
    assert thread.reply_count == REPLY_PREVIEW_LIMIT + 2
    assert thread.replies[0].body == "Reply 0"


async def test_list_by_content_pagination(manager):
    for i in range(3):
        await manager.create(ALICE_ID, CONTENT_42_ID, f"Root {i}")

    page = await manager.list_by_content(CONTENT_42_ID, limit=2, offset=0)
    assert len(page.items) == 2
    assert page.has_more

    last = await manager.list_by_content(CONTENT_42_ID, limit=2, offset=2)
    assert len(last.items) == 1
    assert not last.has_more


async def test_list_by_content_missing_content(manager):
    with pytest.raises(ResourceNotFoundError):
        await manager.list_by_content(999)


async def test_list_replies_oldest_first(manager, root_comment):
    first = await manager.create(BOB_ID, CONTENT_42_ID, "A", root_comment.id)
    second = await manager.create(ALICE_ID, CONTENT_42_ID, "B", root_comment.id)

    page = await manager.list_replies(root_comment.id)

    assert [c.id for c in page.items] == [first.id, second.id]
    assert page.total == 2


async def test_list_replies_missing_parent(manager):
    with pytest.raises(ResourceNotFoundError):
        await manager.list_replies(999)


async def test_list_by_user(manager, root_comment):
    await manager.create(BOB_ID, CONTENT_42_ID, "Bob's", root_comment.id)
    page = await manager.list_by_user(ALICE_ID)
    assert [c.id for c in page.items] == [root_comment.id]
    assert page.total == 1
