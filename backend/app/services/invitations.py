"""
Invitation Service

Orchestrates the project invitation lifecycle on top of the invitation
ledger, the membership synchronizer and the notification side channels.

Every status write is conditional on the stored status still being
PENDING. Invitations past their deadline are flipped to EXPIRED whenever
they are listed or an accept is attempted, so no read ever reports a
stale PENDING invitation.
"""

import logging
from typing import List, Optional

from fastapi import BackgroundTasks
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core import utc_now
from app.core.config import settings
from app.core.constants import (
    MSG_ALREADY_MEMBER,
    MSG_INVITATION_EXPIRED,
    MSG_INVITATION_NOT_PENDING,
    MSG_INVITATION_PENDING,
    MSG_ONLY_OWNER_CAN_INVITE,
)
from app.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvitationExpiredError,
    NotFoundError,
    RejectedOperationError,
)
from app.core.metrics import invitation_transitions_total, invitations_created_total
from app.models.invitation import InvitationStatus, ProjectInvitation, can_transition
from app.models.project import Project
from app.models.user import User
from app.repositories.invitations import InvitationRepository, PendingInvitationExists
from app.services.identity import IdentityDirectory
from app.services.membership import MembershipService
from app.services.notifications.email_service import EmailService
from app.services.notifications.service import NotificationService

logger = logging.getLogger(__name__)


class InvitationService:
    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        email_service: Optional[EmailService] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        self.invitations = InvitationRepository(db)
        self.identity = IdentityDirectory(db)
        self.membership = MembershipService(db)
        self.notifications = notification_service or NotificationService(db)
        self.email_service = email_service or EmailService(db)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    async def _get_invitation(self, invitation_id: str) -> ProjectInvitation:
        invitation = await self.invitations.get_by_id(invitation_id)
        if invitation is None:
            raise NotFoundError("Invitation not found")
        return invitation

    async def _transition(
        self,
        invitation: ProjectInvitation,
        target: InvitationStatus,
        set_responded_at: bool = False,
    ) -> ProjectInvitation:
        """
        Move a PENDING invitation to ``target``.

        Raises RejectedOperationError when the stored record already left
        PENDING, including when a concurrent request got there first.
        """
        if not can_transition(invitation.status, target):
            raise RejectedOperationError(MSG_INVITATION_NOT_PENDING)

        responded_at = utc_now() if set_responded_at else None
        if not await self.invitations.transition(invitation.id, target, responded_at):
            raise RejectedOperationError(MSG_INVITATION_NOT_PENDING)

        invitation_transitions_total.labels(status=target.value).inc()
        update = {"status": target.value}
        if responded_at is not None:
            update["responded_at"] = responded_at
        return invitation.model_copy(update=update)

    async def _expire_overdue(self, invitations: List[ProjectInvitation]) -> List[ProjectInvitation]:
        """Flip past-due PENDING entries to EXPIRED and return the corrected list."""
        now = utc_now()
        result = []
        for invitation in invitations:
            if invitation.is_stale_pending(now):
                if await self.invitations.transition(invitation.id, InvitationStatus.EXPIRED):
                    invitation_transitions_total.labels(
                        status=InvitationStatus.EXPIRED.value
                    ).inc()
                    invitation = invitation.model_copy(
                        update={"status": InvitationStatus.EXPIRED.value}
                    )
                else:
                    # Someone else moved it on; read back what was stored
                    invitation = await self.invitations.get_by_id(invitation.id) or invitation
            result.append(invitation)
        return result

    async def _notify_invitee(
        self,
        invitation: ProjectInvitation,
        invitee: User,
        inviter: User,
        project: Project,
        background_tasks: Optional[BackgroundTasks],
    ) -> None:
        try:
            await self.notifications.notify_project_invited(
                invitee.id,
                project.id,
                project.name,
                inviter.username,
                invitation_id=invitation.id,
            )
        except Exception as e:
            logger.error(f"Failed to create invitation notification for {invitee.username}: {e}")

        email_args = (
            invitee.email,
            invitee.display_name,
            project.name,
            inviter.display_name,
            invitation.message,
            invitation.expires_at,
            invitation.id,
        )
        if background_tasks is not None:
            background_tasks.add_task(
                self.email_service.send_project_invitation_email, *email_args
            )
            return

        try:
            await self.email_service.send_project_invitation_email(*email_args)
        except Exception as e:
            logger.error(f"Failed to send invitation email to {invitee.email}: {e}")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def invite_user_to_project(
        self,
        project_id: str,
        invitee_id: str,
        inviter_identity: str,
        message: Optional[str] = None,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> ProjectInvitation:
        """
        Create a PENDING invitation for ``invitee_id`` to join the project.

        When ``background_tasks`` is given the invitation email goes out after
        the response; otherwise it is awaited here. Either way a failed email
        never fails the invitation.
        """
        project = await self.membership.get_project(project_id)

        inviter = await self.identity.resolve(inviter_identity)
        if inviter is None or not project.is_owner(inviter.id, inviter.username):
            raise ForbiddenError(MSG_ONLY_OWNER_CAN_INVITE)

        invitee = await self.identity.require_user(invitee_id)

        if project.is_owner(invitee.id, invitee.username) or project.is_member(invitee.id):
            raise ConflictError(MSG_ALREADY_MEMBER)

        pending = await self.invitations.find_pending(project.id, invitee.id)
        if pending is not None:
            pending = (await self._expire_overdue([pending]))[0]
            if pending.status == InvitationStatus.PENDING:
                raise ConflictError(MSG_INVITATION_PENDING)

        invitation = ProjectInvitation.expiring_after(
            settings.INVITATION_EXPIRY_DAYS,
            project_id=project.id,
            user_id=invitee.id,
            invited_by=inviter.id,
            invited_by_name=inviter.username,
            message=message,
            project_name=project.name,
            user_email=invitee.email,
            user_name=invitee.username,
        )
        try:
            await self.invitations.create(invitation)
        except PendingInvitationExists:
            # Lost the race against a concurrent invite for the same pair
            raise ConflictError(MSG_INVITATION_PENDING)

        invitations_created_total.inc()
        logger.info(
            f"User {inviter.username} invited {invitee.username} to project {project.name}"
        )

        await self._notify_invitee(invitation, invitee, inviter, project, background_tasks)
        return invitation

    async def accept_invitation(self, invitation_id: str, accepter_identity: str) -> ProjectInvitation:
        """
        Accept an invitation and join the project.

        Membership is granted before the invitation is marked ACCEPTED. If the
        second write never happens the invitation stays PENDING and accepting
        again is safe, since adding a member is idempotent.
        """
        invitation = await self._get_invitation(invitation_id)

        accepter = await self.identity.resolve(accepter_identity)
        if accepter is None or accepter.id != invitation.user_id:
            raise ForbiddenError("Only the invited user can accept this invitation")

        if invitation.status != InvitationStatus.PENDING:
            raise RejectedOperationError(MSG_INVITATION_NOT_PENDING)

        if invitation.is_expired():
            await self._transition(invitation, InvitationStatus.EXPIRED)
            logger.info(f"Invitation {invitation.id} expired on accept attempt")
            raise InvitationExpiredError(MSG_INVITATION_EXPIRED)

        # The inviter authorized this membership when sending the invitation
        await self.membership.add_member(invitation.project_id, accepter.id, invitation.invited_by)

        accepted = await self._transition(
            invitation, InvitationStatus.ACCEPTED, set_responded_at=True
        )
        logger.info(f"User {accepter.username} accepted invitation to project {invitation.project_id}")
        return accepted

    async def reject_invitation(self, invitation_id: str, rejecter_identity: str) -> ProjectInvitation:
        invitation = await self._get_invitation(invitation_id)

        rejecter = await self.identity.resolve(rejecter_identity)
        if rejecter is None or rejecter.id != invitation.user_id:
            raise ForbiddenError("Only the invited user can reject this invitation")

        rejected = await self._transition(
            invitation, InvitationStatus.REJECTED, set_responded_at=True
        )
        logger.info(f"User {rejecter.username} rejected invitation to project {invitation.project_id}")
        return rejected

    async def cancel_invitation(self, invitation_id: str, canceller_identity: str) -> ProjectInvitation:
        """Withdraw a PENDING invitation. Only the project owner may cancel."""
        invitation = await self._get_invitation(invitation_id)
        project = await self.membership.get_project(invitation.project_id)

        canceller = await self.identity.resolve(canceller_identity)
        if canceller is None or not project.is_owner(canceller.id, canceller.username):
            raise ForbiddenError("Only the project owner can cancel invitations")

        cancelled = await self._transition(invitation, InvitationStatus.CANCELLED)
        logger.info(f"User {canceller.username} cancelled invitation {invitation.id}")
        return cancelled

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def list_my_invitations(self, identity: str) -> List[ProjectInvitation]:
        user = await self.identity.require_caller(identity)
        invitations = await self.invitations.find_by_user(user.id)
        return await self._expire_overdue(invitations)

    async def list_pending_invitations(self, identity: str) -> List[ProjectInvitation]:
        user = await self.identity.require_caller(identity)
        invitations = await self.invitations.find_by_user(user.id, InvitationStatus.PENDING)
        invitations = await self._expire_overdue(invitations)
        return [i for i in invitations if i.status == InvitationStatus.PENDING]

    async def list_project_invitations(
        self, project_id: str, identity: str, skip: int = 0, limit: int = 100
    ) -> List[ProjectInvitation]:
        project = await self.membership.get_project(project_id)
        caller = await self.identity.require_caller(identity)
        if not project.is_owner(caller.id, caller.username):
            raise ForbiddenError("Only the project owner can view invitations")

        invitations = await self.invitations.find_by_project(project.id, skip=skip, limit=limit)
        return await self._expire_overdue(invitations)
