from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

SHA_256_ID_PICK_SIZE = 12


class ContainerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    image: str
    command: str
    created_at: Optional[datetime]
    created: str  # relative to the poll time, or the raw value when unparseable
    status: str
    ports: str
    names: str

    @property
    def short_id(self) -> str:
        return self.id[:SHA_256_ID_PICK_SIZE]

    @property
    def is_running(self) -> bool:
        # Same check the runtime's own status column allows: "Up 3 hours", "Up 2 minutes (Paused)"...
        # Fragile if the status wording ever changes.
        return "Up" in self.status


class KillResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    container_id: str
    succeeded: bool
    output: str = ''


class KillAllResult(BaseModel):
    results: List[KillResult] = []

    @property
    def attempted(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> List[str]:
        return [r.container_id for r in self.results if r.succeeded]

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failures(self) -> Dict[str, str]:
        return {r.container_id: r.output for r in self.results if not r.succeeded}
