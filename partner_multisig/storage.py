import json
import logging
import os
import tempfile
from typing import Optional

from .state import ContractState

logger = logging.getLogger(__name__)


class JsonStateStore:
    """Persists the committed wallet state as a single JSON document"""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Optional[ContractState]:
        if not os.path.exists(self.path):
            return None

        with open(self.path, 'r') as f:
            data = json.load(f)
        return ContractState.from_dict(data)

    def save(self, state: ContractState) -> None:
        """Write to a temp file next to the target, then swap it in"""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.wallet-', suffix='.json')
        try:
            with os.fdopen(fd, 'w') as f:
                json.dump(state.to_dict(), f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError:
            os.unlink(tmp_path)
            raise

        logger.debug("Saved wallet state to %s", self.path)
