from __future__ import annotations

from sqlalchemy import func, select

from friendzone.crud import crud_post, crud_profile
from friendzone.models import Comment, Follow, Friendship, Like, Post, Profile, User


def _count(db, model, *criteria) -> int:
    return db.scalar(select(func.count()).select_from(model).where(*criteria))


def test_deleting_profile_removes_everything_referencing_it(db_factory, service_db, make_profile) -> None:
    alice = make_profile("alice")
    bob = make_profile("bob")
    carol = make_profile("carol")

    alice_post = Post(user_id=alice, content="alice writes")
    bob_post = Post(user_id=bob, content="bob writes")
    service_db.add_all([alice_post, bob_post])
    service_db.flush()
    service_db.add_all([
        # on alice's post, by others
        Comment(post_id=alice_post.id, user_id=bob, content="from bob"),
        Like(post_id=alice_post.id, user_id=carol),
        # by alice, on bob's post
        Comment(post_id=bob_post.id, user_id=alice, content="from alice"),
        Like(post_id=bob_post.id, user_id=alice),
        # unrelated to alice
        Like(post_id=bob_post.id, user_id=carol),
        Follow(follower_id=alice, following_id=bob),
        Follow(follower_id=carol, following_id=alice),
        Follow(follower_id=carol, following_id=bob),
        Friendship(user_id_1=alice, user_id_2=bob, requested_by=alice, status="accepted"),
        Friendship(user_id_1=carol, user_id_2=alice, requested_by=carol),
        Friendship(user_id_1=bob, user_id_2=carol, requested_by=bob),
    ])
    service_db.commit()

    assert crud_profile.delete(db_factory(alice), id=alice) is not None

    service_db.expire_all()
    assert service_db.get(Profile, alice) is None
    assert _count(service_db, Post, Post.user_id == alice) == 0
    assert _count(service_db, Comment) == 0
    assert _count(service_db, Like) == 1
    assert _count(service_db, Follow) == 1
    assert _count(service_db, Friendship) == 1
    # the rest of the network is untouched
    assert _count(service_db, Post) == 1
    assert _count(service_db, Profile) == 2
    # the identity itself belongs to the identity provider
    assert service_db.get(User, alice) is not None


def test_deleting_post_removes_its_comments_and_likes(db_factory, service_db, make_profile) -> None:
    alice = make_profile("alice")
    bob = make_profile("bob")

    post = Post(user_id=alice, content="short lived")
    service_db.add(post)
    service_db.flush()
    service_db.add_all([
        Comment(post_id=post.id, user_id=bob, content="first"),
        Like(post_id=post.id, user_id=bob),
    ])
    service_db.commit()
    post_id = post.id

    crud_post.delete(db_factory(alice), id=post_id)

    service_db.expire_all()
    assert _count(service_db, Comment, Comment.post_id == post_id) == 0
    assert _count(service_db, Like, Like.post_id == post_id) == 0
