"""
Access control: owner identity, partner registry and the pause flag
"""

import logging
from typing import List

from .addresses import normalize_address, require_non_null
from .errors import AccessDenied, InvalidInput, Paused, OWNER_ONLY_MESSAGE
from .events import ContractOwnerChange, NewPartner
from .state import CallContext, ContractState

logger = logging.getLogger(__name__)


class AccessControl:
    """Capability checks and administrative operations over a ContractState"""

    @staticmethod
    def seed(owner: str, partners: List[str], min_partners: int = 2) -> ContractState:
        """Build the initial state: owner first, then the configured partners"""
        owner = require_non_null(owner)
        registry = [owner]

        if len(partners) < min_partners:
            raise InvalidInput(f"need at least {min_partners} partners besides the owner, got {len(partners)}")

        for partner in partners:
            partner = require_non_null(partner)
            if partner in registry:
                raise InvalidInput(f"duplicate partner {partner}")
            registry.append(partner)

        return ContractState(owner=owner, partners=registry)

    @staticmethod
    def is_partner(state: ContractState, address: str) -> bool:
        """The owner is always treated as a partner"""
        address = normalize_address(address)
        return address == state.owner or address in state.partners

    @staticmethod
    def require_owner(ctx: CallContext) -> None:
        if ctx.sender != ctx.state.owner:
            raise AccessDenied(OWNER_ONLY_MESSAGE)

    @classmethod
    def require_partner(cls, ctx: CallContext) -> None:
        if not cls.is_partner(ctx.state, ctx.sender):
            raise AccessDenied()

    @staticmethod
    def require_not_paused(ctx: CallContext) -> None:
        if ctx.state.paused:
            raise Paused()

    @classmethod
    def set_contract_owner(cls, ctx: CallContext, new_owner: str) -> None:
        cls.require_owner(ctx)
        new_owner = require_non_null(new_owner)

        old_owner = ctx.state.owner
        ctx.state.owner = new_owner
        ctx.emit(ContractOwnerChange(old_owner, new_owner))
        logger.info("Owner changed from %s to %s", old_owner, new_owner)

    @classmethod
    def add_new_partner(cls, ctx: CallContext, partner: str) -> None:
        cls.require_owner(ctx)
        partner = require_non_null(partner)
        if partner in ctx.state.partners:
            raise InvalidInput(f"{partner} is already a partner")

        ctx.state.partners.append(partner)
        ctx.emit(NewPartner(partner))
        logger.info("Partner %s added, registry size %d", partner, len(ctx.state.partners))

    @classmethod
    def set_paused(cls, ctx: CallContext, paused: bool) -> None:
        cls.require_owner(ctx)
        ctx.state.paused = paused
        logger.info("Partner access %s", "paused" if paused else "unpaused")
