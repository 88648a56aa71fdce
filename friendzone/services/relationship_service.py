"""Service layer that assembles a caller's friends / following / requests lists."""

import logging
from typing import Dict, List

from sqlalchemy.orm import Session

from friendzone.crud import crud_follow, crud_friendship, crud_profile
from friendzone.models.friendship import FriendshipStatus
from friendzone.models.profile import Profile
from friendzone.schemas.friendship import FriendRequestResponse, RelationshipOverview
from friendzone.schemas.profile import ProfileResponse

logger = logging.getLogger(__name__)


class RelationshipService:
    """
    Re-derives every relationship list of a caller from the store.

    Nothing is cached or patched incrementally: views call
    :meth:`build_overview` after each follow / friend mutation so the lists
    never go stale.
    """

    def _profiles_in_order(self, db: Session, ids: List[str]) -> List[ProfileResponse]:
        by_id: Dict[str, Profile] = {p.id: p for p in crud_profile.get_many(db, ids)}
        return [ProfileResponse.model_validate(by_id[i]) for i in ids if i in by_id]

    def build_overview(self, db: Session, *, caller_id: str) -> RelationshipOverview:
        accepted = crud_friendship.for_user(
            db, user_id=caller_id, status=FriendshipStatus.ACCEPTED
        )
        friend_ids = [f.other_participant(caller_id) for f in accepted]

        following_ids = crud_follow.following_ids(db, follower_id=caller_id)

        pending = crud_friendship.for_user(
            db, user_id=caller_id, status=FriendshipStatus.PENDING
        )
        incoming = [
            FriendRequestResponse(
                id=f.id,
                user_id_1=f.user_id_1,
                user_id_2=f.user_id_2,
                status=f.status,
                requested_by=f.requested_by,
                created_at=f.created_at,
                updated_at=f.updated_at,
                requester=ProfileResponse.model_validate(f.requester),
            )
            for f in pending
            if f.user_id_2 == caller_id
        ]
        outgoing_request_ids = [f.user_id_2 for f in pending if f.requested_by == caller_id]

        logger.debug(
            f"Overview for caller={caller_id}: friends={len(friend_ids)}, "
            f"following={len(following_ids)}, incoming={len(incoming)}"
        )

        return RelationshipOverview(
            friend_ids=friend_ids,
            friends=self._profiles_in_order(db, friend_ids),
            following_ids=following_ids,
            following=self._profiles_in_order(db, following_ids),
            follower_count=crud_follow.follower_count(db, user_id=caller_id),
            incoming_requests=incoming,
            outgoing_request_ids=outgoing_request_ids,
        )


# Singleton instance
relationship_service = RelationshipService()
