from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.table import Table
from rich.text import Text

from cFish.config import Config
from cFish.models import ContainerRecord
from cFish.outputs.formatter import RichFormatter
from cFish.outputs.keys import KEY_BINDINGS

FOOTER_LABEL_STYLE = "black on cyan"


class cFishRichScreen:
    def __init__(self, config: Config, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()

        self.container_table = Table()
        self.formatter = RichFormatter(config)
        self.message: Optional[Text] = None

        self.live = Live(console=self.console, auto_refresh=False, screen=True)

    def init_screen(self):
        self.live.start(False)

    def render(self):
        self.live.update(self.prepare_layout(), refresh=True)

    def prepare_layout(self):
        layout = Layout()
        layout.split(
            Layout(name="main"),
            Layout(name="message", size=1),
            Layout(name="footer", size=1),
        )

        layout['main'].update(self.container_table)
        layout['message'].update(self.message or Text(""))
        layout['footer'].update(self.prepare_footer())
        return layout

    @staticmethod
    def prepare_footer() -> Text:
        """
        One line of key hints, built from the same bindings the key handler dispatches on
        """
        width = max(len(binding.label) for binding in KEY_BINDINGS)
        footer = Text()
        for binding in KEY_BINDINGS:
            footer.append(f"{binding.key} ", style="bold")
            footer.append(binding.label.ljust(width), style=FOOTER_LABEL_STYLE)
            footer.append("  ")
        return footer

    def update_container_table(self, records: Sequence[ContainerRecord], index: int):
        title = f"CONTAINERS ({len(records)}) - cFish"
        table = Table(box=box.SIMPLE, header_style=self.config.tui_header_color, expand=True, title=title)
        for column in self.formatter.get_header_row():
            table.add_column(column, no_wrap=True)

        for i, record in enumerate(records):
            row = self.formatter.get_container_row(record)
            if i == index:
                table.add_row(*row, style=self.config.selected_row_style)
            else:
                table.add_row(*row)
        self.container_table = table

    def show_message(self, title: str, content: str):
        style = "bold red" if title == "Error" else "bold green"
        text = Text()
        text.append(f"{title}: ", style=style)
        text.append(content)
        self.message = text

    def stop(self):
        self.live.stop()
