from __future__ import annotations

import pytest
from sqlalchemy import delete, func, insert, select, text, update
from sqlalchemy.exc import IntegrityError

from friendzone.core.exceptions import AccessDeniedError
from friendzone.core.policies import caller_session
from friendzone.crud import (
    crud_comment,
    crud_follow,
    crud_friendship,
    crud_like,
    crud_post,
    crud_profile,
)
from friendzone.models import Follow, Friendship, Like, Post, Profile


@pytest.fixture()
def alice(make_profile) -> str:
    return make_profile("alice")


@pytest.fixture()
def bob(make_profile) -> str:
    return make_profile("bob")


@pytest.fixture()
def carol(make_profile) -> str:
    return make_profile("carol")


@pytest.fixture()
def alice_post(service_db, alice) -> str:
    post = Post(user_id=alice, content="hello from alice")
    service_db.add(post)
    service_db.commit()
    return post.id


# ----- Profile -----
def test_profile_readable_by_everyone(db_factory, alice, bob) -> None:
    db = db_factory(bob)
    assert crud_profile.get(db, alice).username == "alice"


def test_owner_can_update_profile(db_factory, alice) -> None:
    db = db_factory(alice)
    profile = crud_profile.update_by_id(db, id=alice, obj_in={"bio": "hi"})
    assert profile.bio == "hi"


def test_other_caller_cannot_update_profile(db_factory, service_db, alice, bob) -> None:
    db = db_factory(bob)
    with pytest.raises(AccessDeniedError):
        crud_profile.update_by_id(db, id=alice, obj_in={"bio": "hacked"})
    assert service_db.get(Profile, alice).bio == ""


def test_profile_id_is_immutable(db_factory, alice) -> None:
    db = db_factory(alice)
    with pytest.raises(AccessDeniedError):
        crud_profile.update_by_id(db, id=alice, obj_in={"id": "someone-else"})


def test_profile_insert_requires_matching_identity(db_factory, service_db, alice) -> None:
    from friendzone.crud import crud_user

    user = crud_user.create_user(service_db, email="dave@example.com", password="secret1")
    service_db.commit()

    db = db_factory(alice)
    with pytest.raises(AccessDeniedError):
        crud_profile.create(db, obj_in={"id": user.id, "username": "dave"})


# ----- Post -----
def test_post_insert_only_as_self(db_factory, alice, bob) -> None:
    db = db_factory(bob)
    with pytest.raises(AccessDeniedError):
        crud_post.create(db, obj_in={"user_id": alice, "content": "not mine"})

    post = crud_post.create(db, obj_in={"user_id": bob, "content": "mine"})
    assert post.user_id == bob


def test_post_update_and_delete_only_by_author(db_factory, service_db, alice, bob, alice_post) -> None:
    db = db_factory(bob)
    post = crud_post.get(db, alice_post)
    assert post is not None

    with pytest.raises(AccessDeniedError):
        crud_post.update(db, db_obj=post, obj_in={"content": "edited"})
    with pytest.raises(AccessDeniedError):
        crud_post.delete(db, id=alice_post)

    owner_db = db_factory(alice)
    updated = crud_post.update_by_id(owner_db, id=alice_post, obj_in={"content": "edited"})
    assert updated.content == "edited"
    assert crud_post.delete(owner_db, id=alice_post) is not None
    assert service_db.get(Post, alice_post) is None


def test_post_author_cannot_be_reassigned(db_factory, alice, bob, alice_post) -> None:
    db = db_factory(alice)
    with pytest.raises(AccessDeniedError):
        crud_post.update_by_id(db, id=alice_post, obj_in={"user_id": bob})


def test_post_author_cannot_be_reassigned_after_commit(db_factory, service_db, alice, bob, alice_post) -> None:
    db = db_factory(alice)
    post = crud_post.get(db, alice_post)
    db.commit()

    post.user_id = bob
    with pytest.raises(AccessDeniedError):
        db.commit()
    db.rollback()
    assert service_db.get(Post, alice_post).user_id == alice


# ----- Comment / Like -----
def test_comment_rules(db_factory, alice, bob, alice_post) -> None:
    bob_db = db_factory(bob)
    with pytest.raises(AccessDeniedError):
        crud_comment.create(bob_db, obj_in={"post_id": alice_post, "user_id": alice, "content": "x"})

    comment = crud_comment.create(bob_db, obj_in={"post_id": alice_post, "user_id": bob, "content": "nice"})

    # comments are never edited
    with pytest.raises(AccessDeniedError):
        crud_comment.update_by_id(bob_db, id=comment.id, obj_in={"content": "edited"})

    alice_db = db_factory(alice)
    assert [c.id for c in crud_comment.get_by_post(alice_db, post_id=alice_post)] == [comment.id]
    with pytest.raises(AccessDeniedError):
        crud_comment.delete(alice_db, id=comment.id)

    assert crud_comment.delete(bob_db, id=comment.id) is not None


def test_duplicate_like_fails(db_factory, alice, bob, alice_post) -> None:
    db = db_factory(bob)
    crud_like.create(db, obj_in={"post_id": alice_post, "user_id": bob})
    with pytest.raises(IntegrityError):
        crud_like.create(db, obj_in={"post_id": alice_post, "user_id": bob})
    assert crud_like.count_for_post(db, post_id=alice_post) == 1


def test_like_delete_only_by_owner(db_factory, alice, bob, alice_post) -> None:
    bob_db = db_factory(bob)
    like = crud_like.create(bob_db, obj_in={"post_id": alice_post, "user_id": bob})

    alice_db = db_factory(alice)
    with pytest.raises(AccessDeniedError):
        crud_like.delete(alice_db, id=like.id)
    assert crud_like.delete(bob_db, id=like.id) is not None


# ----- Follow -----
def test_follow_self_fails(db_factory, alice) -> None:
    db = db_factory(alice)
    with pytest.raises(IntegrityError):
        crud_follow.create(db, obj_in={"follower_id": alice, "following_id": alice})


def test_follow_insert_and_delete_only_by_follower(db_factory, alice, bob, carol) -> None:
    carol_db = db_factory(carol)
    with pytest.raises(AccessDeniedError):
        crud_follow.create(carol_db, obj_in={"follower_id": alice, "following_id": bob})

    alice_db = db_factory(alice)
    follow = crud_follow.create(alice_db, obj_in={"follower_id": alice, "following_id": bob})

    bob_db = db_factory(bob)
    assert crud_follow.follower_count(bob_db, user_id=bob) == 1
    with pytest.raises(AccessDeniedError):
        crud_follow.delete(bob_db, id=follow.id)
    assert crud_follow.delete_where(alice_db, filters={"follower_id": alice, "following_id": bob}) == 1


# ----- Friendship -----
def test_friendship_insert_requires_requester_identity(db_factory, alice, bob, carol) -> None:
    carol_db = db_factory(carol)
    with pytest.raises(AccessDeniedError):
        crud_friendship.create(
            carol_db,
            obj_in={"user_id_1": alice, "user_id_2": bob, "requested_by": alice},
        )
    # requester but not a participant
    with pytest.raises(AccessDeniedError):
        crud_friendship.create(
            carol_db,
            obj_in={"user_id_1": alice, "user_id_2": bob, "requested_by": carol},
        )


def test_friendship_cannot_start_accepted(db_factory, alice, bob) -> None:
    db = db_factory(alice)
    with pytest.raises(AccessDeniedError):
        crud_friendship.create(
            db,
            obj_in={"user_id_1": alice, "user_id_2": bob, "requested_by": alice, "status": "accepted"},
        )


def test_self_friendship_fails(db_factory, alice) -> None:
    db = db_factory(alice)
    with pytest.raises(IntegrityError):
        crud_friendship.create(
            db,
            obj_in={"user_id_1": alice, "user_id_2": alice, "requested_by": alice},
        )


def test_friendship_visible_only_to_participants(db_factory, alice, bob, carol) -> None:
    friendship = crud_friendship.create(
        db_factory(alice),
        obj_in={"user_id_1": alice, "user_id_2": bob, "requested_by": alice},
    )

    assert crud_friendship.get(db_factory(bob), friendship.id) is not None
    carol_db = db_factory(carol)
    assert crud_friendship.get(carol_db, friendship.id) is None
    assert crud_friendship.select(carol_db) == []
    assert crud_friendship.count(carol_db) == 0


# ----- Anonymous and bulk statements -----
def test_anonymous_caller_sees_and_writes_nothing(db_factory, alice, alice_post) -> None:
    db = db_factory(None)
    assert crud_post.feed(db) == []
    assert crud_profile.get(db, alice) is None
    assert crud_post.count(db) == 0
    with pytest.raises(AccessDeniedError):
        crud_post.create(db, obj_in={"user_id": alice, "content": "anon"})


def test_bulk_statements_are_rejected(db_factory, service_db, alice, alice_post) -> None:
    db = db_factory(alice)
    with pytest.raises(AccessDeniedError):
        db.execute(update(Post).values(content="bulk"))
    db.rollback()
    with pytest.raises(AccessDeniedError):
        db.execute(delete(Like))
    db.rollback()
    assert service_db.get(Post, alice_post).content == "hello from alice"


def test_table_level_statements_are_rejected(db_factory, service_db, alice, bob, alice_post) -> None:
    db = db_factory(bob)
    with pytest.raises(AccessDeniedError):
        db.execute(update(Post.__table__).values(content="rewritten"))
    db.rollback()
    with pytest.raises(AccessDeniedError):
        db.execute(delete(Like.__table__))
    db.rollback()
    with pytest.raises(AccessDeniedError):
        db.execute(insert(Post.__table__).values(id="forged", user_id=alice, content="forged"))
    db.rollback()
    assert service_db.get(Post, alice_post).content == "hello from alice"
    assert service_db.get(Post, "forged") is None


def test_table_level_select_cannot_read_hidden_rows(db_factory, alice, bob, carol) -> None:
    crud_friendship.create(
        db_factory(alice),
        obj_in={"user_id_1": alice, "user_id_2": bob, "requested_by": alice},
    )

    carol_db = db_factory(carol)
    with pytest.raises(AccessDeniedError):
        carol_db.execute(select(Friendship.__table__))
    with pytest.raises(AccessDeniedError):
        carol_db.execute(select(func.count()).select_from(Friendship.__table__))
    with pytest.raises(AccessDeniedError):
        carol_db.execute(text("SELECT * FROM friendships"))

    # the same rows stay hidden through the mapped class
    assert crud_friendship.select(carol_db) == []


def test_service_session_runs_table_level_statements(service_db, alice, alice_post) -> None:
    service_db.execute(update(Post.__table__).values(content="maintenance"))
    service_db.commit()
    assert service_db.execute(select(Post.__table__.c.content)).scalar_one() == "maintenance"
    assert service_db.execute(text("SELECT COUNT(*) FROM posts")).scalar_one() == 1


def test_service_session_is_not_policed(service_db, alice, bob) -> None:
    service_db.add(Follow(follower_id=bob, following_id=alice))
    service_db.add(Friendship(user_id_1=alice, user_id_2=bob, requested_by=alice, status="accepted"))
    service_db.commit()
    assert crud_friendship.count(service_db) == 1


def test_caller_session_context(alice, alice_post) -> None:
    with caller_session(alice) as db:
        assert [p.id for p in crud_post.feed(db)] == [alice_post]
        with pytest.raises(AccessDeniedError):
            crud_post.create(db, obj_in={"user_id": "someone-else", "content": "spoof"})
