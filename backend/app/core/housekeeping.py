import asyncio
import logging

from app.core import utc_now
from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.core.metrics import housekeeping_runs_total, invitation_transitions_total
from app.db.mongodb import get_database
from app.models.invitation import InvitationStatus
from app.repositories.invitations import InvitationRepository
from app.repositories.notifications import NotificationRepository
from app.repositories.users import UserRepository
from app.services.membership import MembershipService

logger = logging.getLogger(__name__)


async def expire_stale_invitations(db=None) -> int:
    """
    Flips PENDING invitations past their deadline to EXPIRED.

    Acceptance checks the deadline on its own, so this only keeps
    listings and the pending index tidy.
    """
    if db is None:
        db = await get_database()
    expired = await InvitationRepository(db).expire_overdue(utc_now())
    if expired:
        invitation_transitions_total.labels(
            status=InvitationStatus.EXPIRED.value
        ).inc(expired)
        logger.info(f"Housekeeping: expired {expired} stale invitations.")
    return expired


async def purge_expired_notifications(db=None) -> int:
    """
    Deletes notifications past their retention window.
    The TTL index does the same on MongoDB, this covers the gap until it runs.
    """
    if db is None:
        db = await get_database()
    deleted = await NotificationRepository(db).purge_expired(utc_now())
    if deleted:
        logger.info(f"Housekeeping: deleted {deleted} expired notifications.")
    return deleted


async def repair_membership_drift(db=None) -> int:
    """
    Rebuilds users' member_projects from projects.member_ids.

    Finishes membership writes that stopped after the project side.
    Returns the number of users whose list changed.
    """
    if db is None:
        db = await get_database()
    membership = MembershipService(db)
    repaired = 0
    async for user_id, member_projects in UserRepository(db).iter_member_projects():
        try:
            project_ids = await membership.reconcile_user_projects(user_id)
        except NotFoundError:
            # Deleted since the scan started
            continue
        if sorted(member_projects) != project_ids:
            repaired += 1
    if repaired:
        logger.info(f"Housekeeping: repaired project memberships of {repaired} users.")
    return repaired


async def run_housekeeping(db=None):
    """Runs one sweep. Failures are logged so the loop keeps going."""
    try:
        await expire_stale_invitations(db)
        await purge_expired_notifications(db)
        await repair_membership_drift(db)
        housekeeping_runs_total.labels(result="success").inc()
    except Exception as e:
        housekeeping_runs_total.labels(result="error").inc()
        logger.error(f"Housekeeping task failed: {e}")


async def housekeeping_loop():
    """Runs the housekeeping sweep every HOUSEKEEPING_INTERVAL_MINUTES."""
    while True:
        await run_housekeeping()
        await asyncio.sleep(settings.HOUSEKEEPING_INTERVAL_MINUTES * 60)
