"""Single-item selection: fzf, InquirerPy, or a numbered prompt."""

from __future__ import annotations

import re
import shutil
import subprocess
import sys
from typing import IO, Protocol

import click
from InquirerPy import inquirer

from git_wt.common.errors import (
    InvalidSelectionError,
    NoItemsError,
    OutOfRangeError,
    PickerError,
    SelectionCancelledError,
)
from git_wt.common.logging_config import get_logger

logger = get_logger(__name__)

# fzf exits with 130 when the user hits Esc / Ctrl-C
FZF_CANCEL_EXIT_CODE = 130

_NUMBER = re.compile(r"^[+-]?\d+$")


class InteractivePicker(Protocol):
    """Something that lets the user choose one of several lines."""

    name: str

    def is_available(self) -> bool: ...

    def pick(self, items: list[str], prompt: str) -> int: ...


class FzfPicker:
    """Delegate selection to the fzf binary."""

    name = "fzf"

    def __init__(self, executable: str = "fzf") -> None:
        self.executable = executable

    def is_available(self) -> bool:
        return shutil.which(self.executable) is not None

    def pick(self, items: list[str], prompt: str) -> int:
        if not items:
            raise NoItemsError()

        args = [
            self.executable,
            "--height=40%",
            "--reverse",
            f"--prompt={prompt}> ",
            "--select-1",
        ]
        logger.debug("+ %s", " ".join(args))
        try:
            result = subprocess.run(
                args,
                input="\n".join(items),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise PickerError(self.name, "executable not found") from e

        if result.returncode == FZF_CANCEL_EXIT_CODE:
            raise SelectionCancelledError()
        if result.returncode != 0:
            raise PickerError(
                self.name,
                f"exit status {result.returncode}",
                result.stderr.strip(),
            )

        selected = result.stdout.strip()
        if not selected:
            raise PickerError(self.name, "no selection made")

        try:
            return items.index(selected)
        except ValueError:
            raise PickerError(
                self.name, f"selected item not found in list: {selected!r}"
            ) from None


class InquirerPicker:
    """In-process fuzzy picker backed by InquirerPy."""

    name = "inquirer"

    def is_available(self) -> bool:
        return sys.stdin.isatty() and sys.stdout.isatty()

    def pick(self, items: list[str], prompt: str) -> int:
        """Show fuzzy select menu.

        Uses exact substring matching which gives predictable results -
        typing a character shows only options containing that character,
        with matches at the start appearing first.
        """
        if not items:
            raise NoItemsError()
        try:
            result = inquirer.fuzzy(  # type: ignore[attr-defined]
                message=prompt,
                choices=items,
                match_exact=True,
            ).execute()
        except KeyboardInterrupt:
            raise SelectionCancelledError() from None
        if result is None:
            raise SelectionCancelledError()
        return items.index(result)


class PromptPicker:
    """Numbered menu on stderr, answer read from stdin. Always available."""

    name = "prompt"

    def __init__(
        self, input_stream: IO[str] | None = None, output_stream: IO[str] | None = None
    ) -> None:
        self.input_stream = input_stream
        self.output_stream = output_stream

    def is_available(self) -> bool:
        return True

    def _echo(self, message: str, *, nl: bool = True) -> None:
        click.echo(message, file=self.output_stream, err=True, nl=nl)

    def pick(self, items: list[str], prompt: str) -> int:
        if not items:
            raise NoItemsError()
        if len(items) == 1:
            return 0

        self._echo(f"{prompt}:")
        for i, item in enumerate(items, start=1):
            self._echo(f"  {i}) {item}")
        self._echo(f"\nSelect number (1-{len(items)}, or q to quit): ", nl=False)

        stream = self.input_stream if self.input_stream is not None else sys.stdin
        answer = stream.readline().strip()

        # EOF reads as an empty answer
        if answer in ("", "q", "Q"):
            raise SelectionCancelledError()
        if not _NUMBER.match(answer):
            raise InvalidSelectionError(answer)

        number = int(answer)
        if number < 1 or number > len(items):
            raise OutOfRangeError(number, len(items))
        return number - 1


def resolve_picker(name: str = "auto") -> InteractivePicker:
    """Get the picker for a configured name.

    "auto" prefers fzf, then InquirerPy on a terminal, then the prompt.
    """
    if name == "fzf":
        return FzfPicker()
    if name == "inquirer":
        return InquirerPicker()
    if name == "prompt":
        return PromptPicker()

    for picker in (FzfPicker(), InquirerPicker()):
        if picker.is_available():
            return picker
    return PromptPicker()


def select(
    items: list[str],
    prompt: str,
    *,
    prefer_interactive: bool = True,
    picker: InteractivePicker | None = None,
) -> int:
    """Let the user choose one item. Returns its index.

    A single item is returned without prompting. When prefer_interactive is
    set and the interactive picker is usable it is used, otherwise the
    numbered prompt.

    Raises NoItemsError, SelectionCancelledError, OutOfRangeError,
    InvalidSelectionError or PickerError.
    """
    if not items:
        raise NoItemsError()
    if len(items) == 1:
        return 0

    if prefer_interactive:
        interactive = picker if picker is not None else resolve_picker()
        if interactive.is_available():
            logger.debug("Selecting with %s picker", interactive.name)
            return interactive.pick(items, prompt)

    return PromptPicker().pick(items, prompt)
