import subprocess
from logging import log, INFO, ERROR
from typing import Callable, Iterable

import typer

from xks.errors import CommandError

# run(command, secrets=(), merge_stderr=True) -> captured output; raises CommandError on failure
Runner = Callable[..., str]


def mask(command: list[str], secrets: Iterable[str] = ()) -> str:
    hidden = {s for s in secrets if s}
    return " ".join("***" if part in hidden else part for part in command)


def run_command(command: list[str], secrets: Iterable[str] = (), merge_stderr: bool = True) -> str:
    """
    A helper function to run a generic command, log it, and handle errors.

    With `merge_stderr` the returned text is the combined stdout/stderr
    transcript. Without it only stdout is returned, so machine-readable
    output is not polluted by warnings; stderr still ends up in the
    CommandError output when the command fails.
    """
    printable = mask(command, secrets)
    print(f"🏃 Running command: {printable}")
    try:
        result = subprocess.run(
            command,
            check=True,               # Raise if the command fails
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if merge_stderr else subprocess.PIPE,
            text=True                 # Decode output as text
        )
    except FileNotFoundError:
        log(ERROR, f"Command not found: '{command[0]}'. Is it installed and in your PATH?")
        raise CommandError(f"command not found: {command[0]}", command)
    except subprocess.CalledProcessError as e:
        log(ERROR, f"Command failed with exit code {e.returncode}.")
        raise CommandError(
            f"'{printable}' failed with exit code {e.returncode}",
            command,
            returncode=e.returncode,
            output=(e.stdout or "") + (e.stderr or ""),
        )
    log(INFO, "✅ Command successful.")
    return result.stdout


def abort(error: object) -> typer.Exit:
    """Reports a failure on stderr and returns the Exit to raise."""
    typer.echo(f"❌ {error}", err=True)
    return typer.Exit(code=1)
