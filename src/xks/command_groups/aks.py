from logging import log, INFO
from pathlib import Path

import typer

from xks.command_groups.commander import abort
from xks.errors import DiscoveryError, XksError

INVOKE_PREFIX = "az aks command invoke"

app = typer.Typer()


def discover_files(directory: str = ".", recursive: bool = True) -> list[str]:
    """
    Lists every non-directory entry below `directory`, in lexical walk order.

    :directory:: STRING (OPTIONAL, default = .)
        Root of the scan. Returned paths are joined onto it, so "." yields
        paths relative to the current working directory.
    :recursive:: BOOL (OPTIONAL, default = True)
        Descend into subdirectories (depth-first, entries sorted by name).
        With False only the direct children of `directory` are listed.

    Any traversal failure raises DiscoveryError; no partial list is returned.
    """
    root = Path(directory)
    if not root.exists():
        raise DiscoveryError(directory, "no such directory")
    if not root.is_dir():
        raise DiscoveryError(directory, "not a directory")

    files: list[str] = []
    try:
        _walk(root, recursive, files)
    except OSError as e:
        raise DiscoveryError(directory, e.strerror or str(e)) from e

    log(INFO, f"🔎 Discovered {len(files)} file(s) under '{directory}'")
    return files


def _walk(path: Path, recursive: bool, files: list[str]) -> None:
    for entry in sorted(path.iterdir(), key=lambda p: p.name):
        # Symlinked directories are listed as files but never descended into
        if entry.is_dir() and not entry.is_symlink():
            if recursive:
                _walk(entry, recursive, files)
        else:
            files.append(str(entry))


def build_file_params(files: list[str]) -> str:
    # Quotes inside paths are passed through unescaped
    return "".join(f' --file "{file}"' for file in files)


def assemble_invoke_command(command_args: list[str], resource_group: str, aks_name: str, files: list[str]) -> str:
    """
    Builds the shell line for `az aks command invoke`.

    The pieces are concatenated in a fixed order: prefix, resource group,
    cluster name, the user command and finally one --file token per file.
    """
    if not command_args:
        raise ValueError("an AKS command is required")
    command = " ".join(command_args)
    return (
        f"{INVOKE_PREFIX} --resource-group {resource_group} --name {aks_name}"
        f' --command "{command}"'
        f"{build_file_params(files)}"
    )


@app.command(
    # Everything after the first word of the AKS command belongs to it
    context_settings={"allow_interspersed_args": False, "ignore_unknown_options": True},
)
def invoke(
    ctx: typer.Context,
    command: list[str] = typer.Argument(..., help="Command to run on the cluster, e.g. kubectl apply -f ."),
    resource_group: str | None = typer.Option(None, "--resource-group", "-g", help="Overrides RESOURCEGROUP."),
    name: str | None = typer.Option(None, "--name", "-n", help="Overrides AKSNAME."),
    directory: str = typer.Option(".", "--directory", "-d", help="Directory whose files are attached."),
    flat: bool = typer.Option(False, "--flat", help="Only attach files directly inside the directory."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the az command without running it."),
):
    """
    Execute an AKS command with every file in the directory attached.
    """
    session = ctx.obj
    try:
        output = session.invoke(
            command,
            directory=directory,
            recursive=not flat,
            dry_run=dry_run,
            resource_group=resource_group,
            aks_name=name,
        )
    except XksError as e:
        raise abort(f"command failed: {e}")
    if not dry_run:
        print(output)
