from typing import Dict, NamedTuple


class KeyBinding(NamedTuple):
    key: str
    label: str
    action: str  # name of the cFishStandalone method to call


KEY_BINDINGS = [
    KeyBinding("w", "Up", "select_previous"),
    KeyBinding("s", "Down", "select_next"),
    KeyBinding("k", "Kill", "kill_selected"),
    KeyBinding("K", "Kill All", "kill_all"),
    KeyBinding("q", "Quit", "shutdown"),
]

ACTIONS_BY_KEY: Dict[str, str] = {binding.key: binding.action for binding in KEY_BINDINGS}
