"""
Deployment and runtime configuration
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from .rules import ConfirmationRules

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class WalletConfig:
    """Settings used to deploy (or reload) a wallet and serve it"""

    owner: str
    partners: List[str] = field(default_factory=list)
    state_path: Optional[str] = None
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 10000

    # Confirmation ratio, fixed at deployment
    confirmation_numerator: int = 3
    confirmation_denominator: int = 5

    def rules(self) -> ConfirmationRules:
        return ConfirmationRules(self.confirmation_numerator, self.confirmation_denominator)

    @classmethod
    def from_dict(cls, data: dict) -> 'WalletConfig':
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        if 'owner' not in data:
            raise ValueError("Config requires an owner address")
        return cls(**data)

    @classmethod
    def from_file(cls, path: str) -> 'WalletConfig':
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f))

    @classmethod
    def from_env(cls, environ=None) -> 'WalletConfig':
        env = os.environ if environ is None else environ
        owner = env.get("MULTISIG_OWNER")
        if not owner:
            raise ValueError("MULTISIG_OWNER is not set")

        partners = [p.strip() for p in env.get("MULTISIG_PARTNERS", "").split(",") if p.strip()]
        return cls(
            owner=owner,
            partners=partners,
            state_path=env.get("MULTISIG_STATE_PATH") or None,
            log_level=env.get("MULTISIG_LOG_LEVEL", "INFO"),
            host=env.get("HOST", "0.0.0.0"),
            port=int(env.get("PORT", 10000))
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
