"""
Entitlement Resolver
Computes the applications an identity may reach and enforces it on access
"""
from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from shared.domain.clock import Clock, utcnow
from shared.infrastructure.observability.logger import get_logger
from identity.application.dto.entitlement_dto import AccessGrant, AssignmentRequest
from identity.domain.entities.access_event import AccessAction, AccessEvent
from identity.domain.entities.application import Application
from identity.domain.entities.user_assignment import UserAssignment
from identity.domain.errors import (
    IdentityNotFound,
    InvalidApiKey,
    InvalidAppRole,
    InvalidApplications,
    InvalidAssignmentTarget,
    InvalidRole,
    NoAccess,
)
from identity.domain.protocols.directory_unit_of_work_protocol import (
    DirectoryUnitOfWorkFactory,
    IDirectoryUnitOfWork,
)
from identity.domain.services.authorization_policy import (
    Action,
    authorize_action,
    ensure_tenant_scope,
)
from identity.domain.services.entitlement_rules import grants_access
from identity.domain.value_objects.identity_context import IdentityContext
from identity.domain.value_objects.role import Role

logger = get_logger(__name__)


class EntitlementResolver:
    """
    Application → tenant license → individual assignment.

    ``available_applications`` filters silently; ``request_access_grant`` and
    ``verify_application_access`` apply the same rules to one application
    and raise NoAccess instead.
    """

    def __init__(self, uow_factory: DirectoryUnitOfWorkFactory, clock: Clock = utcnow) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    async def available_applications(self, context: IdentityContext) -> Sequence[Application]:
        """
        Applications the caller can reach right now, ordered by name.

        - SUPER_ADMIN: every active application
        - TENANT_ADMIN: every application with a current tenant license
        - other roles: current tenant licenses narrowed to active assignments
        """
        authorize_action(context, Action.VIEW_OWN_APPLICATIONS)
        now = self._clock()

        async with self._uow_factory() as uow:
            if context.role is Role.SUPER_ADMIN:
                return await uow.applications.list_all(active_only=True)

            if context.tenant_id is None:
                return []

            if context.role.is_admin():
                return await uow.applications.list_licensed(context.tenant_id, now)

            assignments = await uow.assignments.list_for_identity(context.identity_id, active_only=True)
            return await uow.applications.list_licensed(
                context.tenant_id,
                now,
                application_ids=[a.application_id for a in assignments],
            )

    async def request_access_grant(
        self,
        context: IdentityContext,
        application_id: UUID,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AccessGrant:
        """
        Re-validate entitlement for one application and hand out its URL.

        Records an ``access_app`` event on success.

        Raises:
            NoAccess: Unknown/inactive application, no current license, or
                (non-admin roles) no active assignment
        """
        authorize_action(context, Action.REQUEST_ACCESS_GRANT)

        async with self._uow_factory() as uow:
            application = await self._entitled_application(uow, context, application_id)

            await uow.access_events.add(
                AccessEvent(
                    identity_id=context.identity_id,
                    action=AccessAction.ACCESS_APP,
                    application_id=application.id,
                    ip_address=ip_address,
                    user_agent=user_agent,
                    created_at=self._clock(),
                )
            )
            await uow.commit()

        logger.info(
            "Access grant issued",
            extra={"identity_id": str(context.identity_id), "application_id": str(application.id)},
        )

        return AccessGrant(
            url=application.url,
            application_name=application.name,
            application_id=application.id,
        )

    async def verify_application_access(self, context: IdentityContext, api_key: str) -> Application:
        """
        Used by an external application to check a user's access with its own key.

        Raises:
            InvalidApiKey: Unknown or inactive application key
            NoAccess: The identity is not entitled to that application
        """
        async with self._uow_factory() as uow:
            application = await uow.applications.get_by_api_key(api_key) if api_key else None
            if application is None or not application.active:
                raise InvalidApiKey()

            return await self._entitled_application(uow, context, application.id)

    async def sync_assignments(
        self,
        context: IdentityContext,
        target_identity_id: UUID,
        desired: Sequence[AssignmentRequest],
    ) -> Sequence[UserAssignment]:
        """
        Replace the target's whole active assignment set with ``desired``.

        Every entry is validated before anything is written; one bad entry
        fails the call and leaves the previous set untouched.

        Raises:
            Forbidden: Actor may not sync assignments
            IdentityNotFound: Unknown target
            TenantScopeViolation: Target outside the actor's tenant
            InvalidAssignmentTarget: Target role cannot hold assignments
            InvalidApplications: Duplicate or not currently licensed application ids
            InvalidAppRole: Requested role outside the delegable subset
        """
        authorize_action(context, Action.SYNC_ASSIGNMENTS)
        now = self._clock()

        async with self._uow_factory() as uow:
            target = await uow.identities.get_by_id(target_identity_id)
            if target is None:
                raise IdentityNotFound(details={"identity_id": str(target_identity_id)})

            ensure_tenant_scope(context, target.tenant_id)

            if not target.role.is_delegable():
                raise InvalidAssignmentTarget(details={"role": target.role.value})

            application_ids = [item.application_id for item in desired]
            duplicates = sorted({str(a) for a in application_ids if application_ids.count(a) > 1})
            if duplicates:
                raise InvalidApplications(details={"duplicates": duplicates})

            licensed = await uow.applications.list_licensed(target.tenant_id, now, application_ids=application_ids)
            licensed_ids = {application.id for application in licensed}
            invalid = [str(a) for a in application_ids if a not in licensed_ids]
            if invalid:
                raise InvalidApplications(details={"application_ids": invalid})

            wanted = [(item.application_id, _delegable_role(item.app_role)) for item in desired]

            if wanted:
                result = await uow.assignments.replace_for_identity(target.id, wanted, now)
            else:
                await uow.assignments.deactivate_all_for_identity(target.id, now)
                result = []
            await uow.commit()

        logger.info(
            "Assignments synchronized",
            extra={
                "actor_id": str(context.identity_id),
                "identity_id": str(target.id),
                "count": len(result),
            },
        )
        return result

    async def list_assignments(self, context: IdentityContext, target_identity_id: UUID) -> Sequence[UserAssignment]:
        """Active assignments of a member of the caller's tenant."""
        authorize_action(context, Action.SYNC_ASSIGNMENTS)

        async with self._uow_factory() as uow:
            target = await uow.identities.get_by_id(target_identity_id)
            if target is None:
                raise IdentityNotFound(details={"identity_id": str(target_identity_id)})

            ensure_tenant_scope(context, target.tenant_id)
            return await uow.assignments.list_for_identity(target.id, active_only=True)

    async def _entitled_application(
        self,
        uow: IDirectoryUnitOfWork,
        context: IdentityContext,
        application_id: UUID,
    ) -> Application:
        application = await uow.applications.get_by_id(application_id)

        license = None
        assignment = None
        if context.tenant_id is not None:
            license = await uow.licenses.get(context.tenant_id, application_id)
            assignment = await uow.assignments.get(context.identity_id, application_id)

        if not grants_access(context.role, application, license, assignment, self._clock()):
            logger.info(
                "Access denied",
                extra={"identity_id": str(context.identity_id), "application_id": str(application_id)},
            )
            raise NoAccess(details={"application_id": str(application_id)})

        return application


def _delegable_role(value: Role | str) -> Role:
    try:
        role = value if isinstance(value, Role) else Role.from_string(value)
    except InvalidRole as e:
        raise InvalidAppRole(details={"app_role": str(value)}) from e
    if not role.is_delegable():
        raise InvalidAppRole(details={"app_role": role.value})
    return role
