from typing import List

from rich.text import Text

from cFish.config import Config
from cFish.models import ContainerRecord

header_map = {
    "status": "",
    "id": "ID",
    "image": "Image",
    "command": "Command",
    "created": "Created",
    "state": "Status",
    "ports": "Ports",
    "names": "Name",
}

RUNNING_ICON = "🟢"
STOPPED_ICON = "🔴"


class RichFormatter:
    def __init__(self, config: Config):
        self.config = config

    def get_attributes(self) -> List[str]:
        return [k.strip() for k in self.config.priority_attributes.split(",") if k.strip() in header_map]

    def get_header_row(self) -> List[str]:
        return [header_map[k] for k in self.get_attributes()]

    def get_container_row(self, record: ContainerRecord) -> List[Text]:
        values = {
            "status": RUNNING_ICON if record.is_running else STOPPED_ICON,
            "id": record.short_id,
            "image": record.image,
            "command": record.command,
            "created": record.created,
            "state": record.status,
            "ports": record.ports,
            "names": record.names,
        }
        return [Text(values[attr], overflow="ellipsis", no_wrap=True) for attr in self.get_attributes()]
