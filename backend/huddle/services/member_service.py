"""Workspace members: lookup, role changes and removal."""

from huddle.models.documents import Member, MemberRole
from huddle.models.views import MemberWithUser, UserProfile
from huddle.services.access import get_member, require_admin, require_member
from huddle.services.errors import InvalidOperation, NotFound, Unauthorized
from huddle.store import DocumentStore
from huddle.utils import get_logger

logger = get_logger(__name__)


def get_user_profile(store: DocumentStore, user_id: str) -> UserProfile | None:
    user = store.get("users", user_id)
    if user is None:
        return None
    return UserProfile(id=user.id, name=user.name, email=user.email)


class MemberService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def _with_user(self, member: Member) -> MemberWithUser:
        return MemberWithUser(**member.model_dump(), user=get_user_profile(self.store, member.user_id))

    def current(self, user_id: str | None, workspace_id: str) -> Member | None:
        """The caller's own membership, or None."""
        return get_member(self.store, user_id, workspace_id)

    def get(self, user_id: str | None, workspace_id: str) -> list[MemberWithUser]:
        """All members of a workspace. Non-members get []."""
        if get_member(self.store, user_id, workspace_id) is None:
            return []

        members = self.store.query("members", "by_workspace_id", workspace_id=workspace_id)
        return [self._with_user(member) for member in members]

    def get_by_id(self, user_id: str | None, member_id: str) -> MemberWithUser | None:
        member = self.store.get("members", member_id)
        if member is None:
            return None
        if get_member(self.store, user_id, member.workspace_id) is None:
            return None
        return self._with_user(member)

    def update(self, user_id: str | None, member_id: str, role: MemberRole) -> str:
        """Change a member's role. Admin only."""
        member = self.store.get("members", member_id)
        if member is None:
            raise NotFound("Member not found")
        require_admin(self.store, user_id, member.workspace_id)

        self.store.patch("members", member_id, {"role": role})
        logger.info(f"Member {member_id} role set to {role.value}")
        return member_id

    def remove(self, user_id: str | None, member_id: str) -> str:
        """Remove a member, or leave a workspace when removing oneself.

        Admins cannot be removed, by others or by themselves. The member's
        messages (with their reactions), reactions and conversations go too.
        """
        member = self.store.get("members", member_id)
        if member is None:
            raise NotFound("Member not found")
        current = require_member(self.store, user_id, member.workspace_id)

        if member.role == MemberRole.admin:
            if current.id == member.id:
                raise InvalidOperation("Cannot remove self if self is an admin")
            raise InvalidOperation("Admin cannot be removed")
        if current.id != member.id and current.role != MemberRole.admin:
            raise Unauthorized()

        for message in self.store.query("messages", "by_member_id", member_id=member.id):
            for reaction in self.store.query("reactions", "by_message_id", message_id=message.id):
                self.store.delete("reactions", reaction.id)
            self.store.delete("messages", message.id)

        for reaction in self.store.query("reactions", "by_member_id", member_id=member.id):
            self.store.delete("reactions", reaction.id)

        for conversation in self.store.query("conversations", "by_workspace_id", workspace_id=member.workspace_id):
            if member.id in (conversation.member_one_id, conversation.member_two_id):
                self.store.delete("conversations", conversation.id)

        self.store.delete("members", member.id)
        logger.info(f"Member {member.id} removed from workspace {member.workspace_id}")
        return member_id
