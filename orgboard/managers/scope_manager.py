"""Scope Manager - Resolves the current actor's organization (tenant) scope.

Resolution order:
1. The actor context's own organizationId, when present and non-blank
2. The organizationId on the actor's directory record (DirectoryLookup)
3. The configured default tenant (rules.default_organization_id)

Falling back to the default tenant is logged as a warning and never raised
to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .. import const
from ..rules import DEFAULT_RULES

if TYPE_CHECKING:
    from ..interfaces import DirectoryLookup
    from ..rules import RuleSet
    from ..type_defs import ActorContext, OrganizationScope


def _clean_org_id(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class ScopeManager:
    """Resolves and caches one OrganizationScope per actor for the session."""

    def __init__(
        self,
        directory: DirectoryLookup | None = None,
        rules: RuleSet | None = None,
    ) -> None:
        """Initialize the scope manager.

        Args:
            directory: Optional lookup for the actor's own record
            rules: Rule tables providing the default tenant
        """
        self._directory = directory
        self.rules: RuleSet = rules or DEFAULT_RULES
        self._cache: dict[str, OrganizationScope] = {}

    async def async_resolve_scope(
        self, actor: ActorContext | Mapping[str, Any]
    ) -> OrganizationScope:
        """Resolve the tenant scope for actor, once per session.

        Scopes are cached per actor id. An actor context without an id is
        resolved on every call.

        Args:
            actor: {id, role, organizationId} from the authentication collaborator

        Returns:
            OrganizationScope; is_default is True when the fallback tenant was used
        """
        actor_id = _clean_org_id(actor.get(const.ACTOR_ID))
        # Anonymous actors are resolved every time; only identified ones cache
        if actor_id is not None and actor_id in self._cache:
            return self._cache[actor_id]

        role = actor.get(const.ACTOR_ROLE)
        organization_id = _clean_org_id(actor.get(const.ACTOR_ORGANIZATION_ID))
        if organization_id is None:
            organization_id = await self._async_lookup_organization(actor_id)

        is_default = organization_id is None
        if is_default:
            organization_id = self.rules.default_organization_id
            const.LOGGER.warning(
                "Could not resolve organization for actor %s; using default "
                "organization '%s'",
                actor_id,
                organization_id,
            )

        scope: OrganizationScope = {
            "organization_id": organization_id,
            "actor_id": actor_id,
            "actor_role": role if isinstance(role, str) else None,
            "is_default": is_default,
        }
        if actor_id is not None:
            self._cache[actor_id] = scope
        const.LOGGER.debug("Resolved scope %s for actor %s", scope, actor_id)
        return scope

    async def _async_lookup_organization(self, actor_id: str | None) -> str | None:
        if self._directory is None or actor_id is None:
            return None
        try:
            record = await self._directory.async_get_record(actor_id)
        except Exception as err:  # pylint: disable=broad-exception-caught
            const.LOGGER.warning(
                "Organization lookup failed for actor %s: %s", actor_id, err
            )
            return None
        if not isinstance(record, Mapping):
            return None
        return _clean_org_id(record.get(const.RAW_ORGANIZATION_ID))

    def invalidate(self, actor_id: str | None = None) -> None:
        """Forget cached scopes (one actor, or all when actor_id is None)."""
        if actor_id is None:
            self._cache.clear()
        else:
            self._cache.pop(actor_id, None)
