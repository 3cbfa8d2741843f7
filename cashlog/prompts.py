"""Reading answers from the terminal."""

import sys


def _read_line(prompt):
    print(prompt, end="", flush=True)
    line = sys.stdin.readline()
    return line.strip() if line else None


def prompt_input(prompt: str) -> str:
    """Show a prompt and return the trimmed answer; empty at end of input."""
    return _read_line(prompt) or ""


def select(label, items):
    """Let the user pick one item by number or by name, asking until valid.

    Raises ValueError when there is nothing to choose and EOFError when input ends.
    """
    choices = list(items)
    if not choices:
        raise ValueError(f"{label}: nothing to select")
    while True:
        print(f"{label}:")
        for number, item in enumerate(choices, start=1):
            print(f"[{number}] {item}")
        answer = _read_line("Enter number: ")
        if answer is None:
            raise EOFError(f"{label}: no selection made")
        by_name = [item for item in choices if str(item) == answer]
        if by_name:
            return by_name[0]
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            return choices[int(answer) - 1]
        print("Invalid selection.")