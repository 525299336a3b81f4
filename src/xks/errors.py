class XksError(Exception):
    """Base class for every failure xks reports to the user."""


class MissingEnvironmentError(XksError):
    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(
            f"missing required environment variables: {', '.join(self.names)}"
        )


class CommandError(XksError):
    """
    An external command could not be run or exited non-zero.

    :command:: LIST[STR]
        The argument list that was executed.
    :returncode:: INT or None
        Exit status, or None when the binary could not be found.
    :output:: STR
        Combined stdout/stderr captured from the process.
    """

    def __init__(self, message: str, command: list[str], returncode: int | None = None, output: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        if output:
            message = f"{message}\nOutput:\n{output}"
        super().__init__(message)


class DiscoveryError(XksError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"failed to discover files in '{path}': {reason}")
