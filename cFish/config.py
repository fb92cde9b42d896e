import logging
import os
from typing import Optional

from dotenv import load_dotenv

OUTPUT_FORMATS = ('json', 'delimited')


class Config:
    def __init__(self, docker_cli, output_format, poll_interval, command_timeout, log_level, log_file,
                 tui_header_color, selected_row_style, priority_attributes):
        # Runtime CLI options
        self.docker_cli = docker_cli
        self.output_format = output_format
        self.command_timeout = command_timeout

        # Poller options
        self.poll_interval = poll_interval

        # Logging options
        self.log_level = log_level
        self.log_file = log_file

        # TUI options
        self.tui_header_color = tui_header_color
        self.selected_row_style = selected_row_style
        self.priority_attributes = priority_attributes

        self.validate()

    def validate(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format `{self.output_format}`, expected one of {OUTPUT_FORMATS}")
        if self.poll_interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {self.poll_interval}")
        if self.command_timeout is not None and self.command_timeout <= 0:
            raise ValueError(f"Command timeout must be positive, got {self.command_timeout}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level `{self.log_level}`")

    @staticmethod
    def _get_float(name: str, default: Optional[float]) -> Optional[float]:
        value = os.getenv(name)
        if value is None or value.strip() == '':
            return default
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{name} must be a number, got `{value}`") from None

    @staticmethod
    def load_env_from_file(path: str = None):
        if path:
            load_dotenv(path)
        else:
            load_dotenv()

        config = {
            # Runtime CLI options
            'docker_cli': os.getenv("DOCKER_CLI", "docker"),
            'output_format': os.getenv("DOCKER_OUTPUT_FORMAT", "json").lower(),
            'command_timeout': Config._get_float("COMMAND_TIMEOUT", None),

            # Poller options
            'poll_interval': Config._get_float("POLL_INTERVAL", 1.0),

            # Logging options
            'log_level': os.getenv("LOG_LEVEL", "INFO").upper(),
            'log_file': os.getenv("LOG_FILE") or None,

            # TUI options
            'tui_header_color': os.getenv("TUI_HEADER_COLOR", "bold"),
            'selected_row_style': os.getenv("SELECTED_ROW_STYLE", "black on cyan"),
            'priority_attributes': os.getenv("PRIORITY_ATTRIBUTES", "status,id,image,created,ports,names")
        }

        return Config(**config)
