"""The interactive shell over an in-memory filesystem."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional, TextIO

from omegaos.block_device import MemoryBlockDevice
from omegaos.file_ops import create_file, delete_file, format_fs, read_file, write_file
from omegaos.file_table import FileSystemError, NoFreeBlocksError

HELP_TEXT = (
    "Available commands: touch <file>, rm <file>, wf <file>, ls, cat <file>, "
    "echo, help, exit"
)
WRONG_ARITY = "Incorrect amount of parameters."
# Longest file name accepted by the wf command, in bytes.
FILENAME_BUFFER = 64


def _read_stdin() -> str:
    return input()


class Shell:
    """Reads commands and runs them against a block device."""

    def __init__(
        self,
        device,
        read_input: Optional[Callable[[], Optional[str]]] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self.device = device
        self._read_input = _read_stdin if read_input is None else read_input
        self._output = sys.stdout if output is None else output
        self._commands = {
            "help": self._help,
            "echo": self._echo,
            "touch": self._touch,
            "wf": self._write,
            "rm": self._remove,
            "cat": self._cat,
            "ls": self._list,
        }

    def _say(self, text: str = "") -> None:
        self._output.write(text + "\n")

    def run(self) -> None:
        """Prompt for commands until ``exit`` or the end of input."""
        while True:
            self._output.write("> ")
            self._output.flush()
            try:
                command = self._read_input()
            except EOFError:
                return
            if command is None:
                continue
            if command == "exit":
                self._say("Thanks for using OmegaOS")
                return
            self.handle_command(command)

    def handle_command(self, command: str) -> None:
        """Parse one command line and carry it out."""
        if self.device is None:
            self._say("Device is not initialized.")
            return
        parts = command.split()
        if not parts:
            return
        action = self._commands.get(parts[0])
        if action is None:
            self._say(f"Unknown command: {command}")
        else:
            action(parts)

    def _help(self, parts: list[str]) -> None:
        if len(parts) != 1:
            self._say(WRONG_ARITY)
            self._say("Did you mean 'help'?")
            return
        self._say(HELP_TEXT)

    def _echo(self, parts: list[str]) -> None:
        if len(parts) < 2:
            self._say("Usage: echo <text>")
            return
        self._say(" ".join(parts[1:]))

    def _touch(self, parts: list[str]) -> None:
        if len(parts) != 2:
            self._say(WRONG_ARITY)
            return
        try:
            create_file(self.device, parts[1])
        except NoFreeBlocksError:
            self._say("No available blocks for new file")
        except (FileSystemError, ValueError) as exc:
            self._say(str(exc))

    def _write(self, parts: list[str]) -> None:
        if len(parts) != 2:
            self._say(WRONG_ARITY)
            return
        raw_name = parts[1].encode("utf-8")[:FILENAME_BUFFER]
        self._say("Enter data for file:")
        data = self._read_input()
        if data is None:
            self._say("No data entered!")
            return
        try:
            filename = raw_name.decode("utf-8")
        except UnicodeDecodeError:
            return
        try:
            write_file(self.device, filename, data.encode("utf-8"))
        except FileNotFoundError:
            self._say("File not found")
        except ValueError as exc:
            self._say(str(exc))

    def _remove(self, parts: list[str]) -> None:
        if len(parts) != 2:
            self._say(WRONG_ARITY)
            return
        self._say(f"Removing file: {parts[1]}")
        delete_file(self.device, parts[1])

    def _cat(self, parts: list[str]) -> None:
        if len(parts) != 2:
            self._say(WRONG_ARITY)
            return
        data = read_file(self.device, parts[1])
        if data is None:
            self._say("File not found!")
            return
        try:
            self._say(data.decode("utf-8"))
        except UnicodeDecodeError:
            self._say("File content is not valid UTF-8")

    def _list(self, parts: list[str]) -> None:
        if len(parts) != 1:
            self._say(WRONG_ARITY)
            self._say("Did you mean 'ls'?")
            return
        with self.device.file_table.lock() as table:
            files = table.list_files()
        if not files:
            self._say("No files found.")
            return
        self._say("Files:")
        for name in files:
            self._say(f"- {name}")


def main(argv=None) -> int:
    """Format a fresh in-memory device and run the shell on standard input."""
    parser = argparse.ArgumentParser(
        prog="omegaos", description="Shell over an in-memory block filesystem."
    )
    parser.parse_args(argv)
    print("Welcome to OmegaOS!")
    device = MemoryBlockDevice()
    format_fs(device)
    Shell(device).run()
    return 0