import argparse
import logging
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cFish import __version__
from cFish.config import OUTPUT_FORMATS, Config
from cFish.docker_cli import CommandRunner, ContainerCollector, ContainerController
from cFish.exceptions import CollectionError
from cFish.logs import setup_logging
from cFish.models import KillResult
from cFish.notifier import LoggingNotifier
from cFish.outputs.formatter import RichFormatter

DASHBOARD_LOG_FILE = "cfish.log"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cfish", description="Watch and kill running containers")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--env-file", help="load settings from this .env file")
    parser.add_argument("--format", dest="output_format", choices=OUTPUT_FORMATS,
                        help="output format requested from the runtime CLI")
    parser.add_argument("--interval", type=float, help="seconds between polls")
    parser.add_argument("--timeout", type=float, help="seconds before a runtime CLI call is abandoned")
    parser.add_argument("--log-level", help="logging level name")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("watch", help="live dashboard (default)")

    ps = subparsers.add_parser("ps", help="list running containers once")
    ps.add_argument("--json", action="store_true", help="print one JSON record per line")

    kill = subparsers.add_parser("kill", help="kill containers by ID")
    kill.add_argument("container_ids", nargs="+", metavar="ID")

    subparsers.add_parser("kill-all", help="kill every running container")
    return parser


def load_config(args: argparse.Namespace) -> Config:
    config = Config.load_env_from_file(args.env_file)
    if args.output_format:
        config.output_format = args.output_format
    if args.interval is not None:
        config.poll_interval = args.interval
    if args.timeout is not None:
        config.command_timeout = args.timeout
    if args.log_level:
        config.log_level = args.log_level.upper()
    config.validate()
    return config


def print_results(console: Console, results: List[KillResult]) -> None:
    for result in results:
        if result.succeeded:
            console.print(f"[green]killed[/green] {escape(result.container_id)}")
        else:
            console.print(f"[red]failed[/red] {escape(result.container_id)}: {escape(result.output)}")


def command_ps(config: Config, console: Console, as_json: bool) -> int:
    collector = ContainerCollector(CommandRunner(config.docker_cli, config.command_timeout), config.output_format)
    try:
        records = collector.list_running_containers()
    except CollectionError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        if e.output:
            console.print(e.output, markup=False)
        return 1

    if as_json:
        for record in records:
            console.print_json(record.model_dump_json())
        return 0

    formatter = RichFormatter(config)
    table = Table(box=box.SIMPLE, header_style=config.tui_header_color, title=f"CONTAINERS ({len(records)})")
    for column in formatter.get_header_row():
        table.add_column(column)
    for record in records:
        table.add_row(*formatter.get_container_row(record))
    console.print(table)
    return 0


def command_kill(config: Config, console: Console, container_ids: List[str]) -> int:
    controller = ContainerController(CommandRunner(config.docker_cli, config.command_timeout), LoggingNotifier())
    results = [controller.kill(container_id) for container_id in container_ids]
    print_results(console, results)
    return 0 if all(r.succeeded for r in results) else 1


def command_kill_all(config: Config, console: Console) -> int:
    runner = CommandRunner(config.docker_cli, config.command_timeout)
    try:
        records = ContainerCollector(runner, config.output_format).list_running_containers()
    except CollectionError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 1

    summary = ContainerController(runner, LoggingNotifier()).kill_all(records)
    print_results(console, summary.results)
    console.print(f"{summary.success_count} of {summary.attempted} containers killed")
    return 0 if not summary.failures else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args)
    except ValueError as e:
        print(f"cfish: {e}", file=sys.stderr)
        return 2

    command = args.command or "watch"
    if command == "watch" and not config.log_file:
        # Anything logged to the terminal would tear the live screen
        config.log_file = DASHBOARD_LOG_FILE

    setup_logging(config)
    console = Console()
    logging.debug(f"cli - Running `{command}`")

    if command == "ps":
        return command_ps(config, console, args.json)
    if command == "kill":
        return command_kill(config, console, args.container_ids)
    if command == "kill-all":
        return command_kill_all(config, console)

    # Imported here, the dashboard needs a POSIX terminal
    from cFish.outputs.rich_stdout import cFishStandalone
    cFishStandalone(config).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
