import logging

from rich.console import Console
from rich.logging import RichHandler

from cFish.config import Config


def setup_logging(config: Config) -> None:
    """
    Configures the root logger once. Logs go to `config.log_file` when set, which keeps them off the live
    screen, otherwise to stderr through rich.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if config.log_file:
        handler = logging.FileHandler(config.log_file, mode="a")
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger.addHandler(handler)
