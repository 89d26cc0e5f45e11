"""Interactive demo for pi-linenoise. Uses Click for argument parsing."""

from __future__ import annotations

from typing import Callable

import click

from pi.linenoise.colors import RGB
from pi.linenoise.config import LineNoiseOptions
from pi.linenoise.editor import LineNoise
from pi.linenoise.errors import EndOfInput, Interrupted

COMPLETIONS = [
    "Hello, world!",
    "Hello, Linenoise!",
    "Python is awesome!",
]

HINTS = [
    "Carpe Diem",
    "Lorem Ipsum",
    "Python is awesome!",
]

HINT_COLOR: RGB = (127, 0, 127)


def complete(buffer: str) -> list[str]:
    return [c for c in COMPLETIONS if c.startswith(buffer)]


def hint(buffer: str) -> tuple[str | None, RGB | None]:
    """Remainder of the first hint starting with *buffer*."""
    for candidate in HINTS:
        if candidate.startswith(buffer):
            return candidate[len(buffer):], HINT_COLOR
    return None, None


def run_demo(
    editor: LineNoise,
    echo: Callable[[str], None] = click.echo,
    *,
    prompt: str = "? ",
    eol_marker: bool = False,
    history_file: str | None = None,
) -> None:
    """Read lines until ``exit``, Ctrl-C or end of input, echoing each one."""
    editor.set_completion_callback(complete)
    editor.set_hints_callback(hint)

    echo("Type 'exit' to quit")
    while True:
        try:
            line = editor.get_line(prompt)
        except Interrupted:
            echo("\nCaptured Ctrl-C. Quitting.")
            break
        except EndOfInput:
            echo("\nEnd of input. Quitting.")
            break

        echo(("<EOL>" if eol_marker else "") + f"\nOutput: {line}")
        editor.add_history(line)
        if line == "exit":
            break

    if history_file:
        editor.save_history(history_file)


@click.command()
@click.option("--prompt", default="? ", show_default=True, help="Prompt shown before each line")
@click.option("--encoding", default="utf-8", show_default=True, help="Terminal encoding")
@click.option("--history-file", type=click.Path(dir_okay=False), default=None, help="Load and save history here")
@click.option("--max-history", type=click.IntRange(min=1), default=None, help="Maximum history entries")
@click.option("--preserve-edits", is_flag=True, help="Keep edits made to recalled history lines")
@click.option("--eol-marker", is_flag=True, help="Print <EOL> after each line read")
@click.option("--clear/--no-clear", default=True, help="Clear the screen first")
def main(prompt, encoding, history_file, max_history, preserve_edits, eol_marker, clear):
    """Try out line editing, history, completion and hints."""
    options = LineNoiseOptions.from_env(
        encoding=encoding,
        history_max_length=max_history,
        preserve_history_edits=preserve_edits,
    )
    editor = LineNoise(options=options)

    if history_file:
        try:
            editor.load_history(history_file)
        except FileNotFoundError:
            pass
    if clear and editor.mode == "supported-tty":
        editor.clear_screen()

    run_demo(editor, prompt=prompt, eol_marker=eol_marker, history_file=history_file)


if __name__ == "__main__":
    main()
