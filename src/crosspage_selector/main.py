from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, List, TextIO

from crosspage_selector.config_models import BrowserConfig, load_and_validate_config
from crosspage_selector.core.factory import ComponentFactory
from crosspage_selector.core.models import Accumulating
from crosspage_selector.core.runner import SessionRunner
from crosspage_selector.core.session import BrowseSession
from crosspage_selector.utils.logging import setup_logging

DEFAULT_CONFIG = "configs/browser.yaml"

HELP = """Commands:
  show            reprint the current page
  page N          go to page N
  next | prev     move one page
  size N          rows per page
  toggle ID       select/deselect one record
  all             toggle every record on this page
  clear           empty the selection
  select N        select the next N unselected records, across pages
  reload          fetch the current page again
  selected        list selected ids
  help | quit"""


def load_config(path: str) -> BrowserConfig:
    """Load the config file, or defaults when it does not exist."""
    if not Path(path).exists():
        return BrowserConfig()
    return load_and_validate_config(path)


def render_page(session: BrowseSession) -> str:
    """Plain-text table of the current page with selection marks."""
    lines = []
    header_mark = "x" if session.all_on_page_selected() else " "
    lines.append(f"[{header_mark}] {'ID':>8}  Title / Artist")
    for rec in session.records:
        mark = "x" if rec.id in session.selection else " "
        lines.append(f"[{mark}] {rec.id:>8}  {rec.title} / {rec.display_label}")

    lines.append(
        f"Page {session.current_page} of {session.total_pages}"
        f" | rows {session.view.page_size} | {session.total_records} records"
    )
    count = session.selected_count
    if count:
        lines.append(f"{count} item{'s' if count != 1 else ''} selected")
    if isinstance(session.accumulator_state, Accumulating):
        lines.append(f"Selecting... {session.accumulator_state.remaining} to go")
    if session.last_error:
        lines.append(f"Error: {session.last_error.reason}")
    return "\n".join(lines)


def render_selection(session: BrowseSession) -> str:
    ids = session.selection.ids()
    if not ids:
        return "Nothing selected"
    return f"Selected IDs ({len(ids)}): " + ", ".join(str(i) for i in ids)


def _int_arg(args: List[str]) -> int:
    if len(args) != 1:
        raise ValueError("expected one integer argument")
    return int(args[0])


def run_command(runner: SessionRunner, line: str, out: TextIO = sys.stdout) -> bool:
    """
    Execute one shell command against the runner's session.

    Returns:
        False when the shell should exit.
    """
    parts = line.split()
    if not parts:
        return True
    cmd, args = parts[0].lower(), parts[1:]
    session = runner.session

    if cmd in ("quit", "exit", "q"):
        return False
    if cmd == "help":
        print(HELP, file=out)
        return True
    if cmd == "selected":
        print(render_selection(session), file=out)
        return True

    actions: Dict[str, Callable[[], object]] = {
        "show": lambda: runner.dispatch([]),
        "page": lambda: runner.go_to_page(_int_arg(args)),
        "next": lambda: runner.dispatch(session.next_page()),
        "prev": lambda: runner.dispatch(session.prev_page()),
        "size": lambda: runner.set_page_size(_int_arg(args)),
        "toggle": lambda: session.toggle_row(_int_arg(args)),
        "all": session.toggle_all_on_current_page,
        "clear": session.clear_selection,
        "select": lambda: runner.select_next(_int_arg(args)),
        "reload": runner.reload,
    }
    action = actions.get(cmd)
    if action is None:
        print(f"Unknown command: {cmd} (try 'help')", file=out)
        return True

    try:
        action()
    except ValueError as e:
        print(f"Invalid arguments for {cmd}: {e}", file=out)
        return True

    print(render_page(session), file=out)
    return True


def run_shell(runner: SessionRunner, stdin: TextIO = sys.stdin, out: TextIO = sys.stdout) -> None:
    """Open the first page and read commands until EOF or quit."""
    runner.open()
    print(render_page(runner.session), file=out)
    for line in stdin:
        if not run_command(runner, line, out):
            break


def main() -> None:
    """Main entry point for the browser shell."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG

    try:
        config = load_config(config_path)
    except ValueError as e:
        print(e)
        raise SystemExit(2)

    setup_logging(config.logging_config)
    built = ComponentFactory(config).build()
    print(f"Browsing {config.source.base_url} (type 'help' for commands)")
    try:
        run_shell(built.runner)
    except KeyboardInterrupt:
        print("Stopped by user")
    finally:
        print("DONE:", built.runner.report)


if __name__ == "__main__":
    main()
