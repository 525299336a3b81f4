import json
from dataclasses import dataclass
from logging import log, INFO

from xks.command_groups.aks import assemble_invoke_command, discover_files
from xks.command_groups.commander import Runner, run_command
from xks.config import AksSettings
from xks.errors import CommandError


@dataclass(frozen=True)
class SessionStatus:
    logged_in: bool
    subscription_id: str


class AzureSession:
    """
    Per-process Azure state, built once at startup and handed to every command.

    All `az` calls go through `runner`, so tests can swap in a fake.
    """

    def __init__(self, settings: AksSettings, runner: Runner = run_command) -> None:
        self.settings: AksSettings = settings
        self.runner: Runner = runner
        self.logged_in: bool = False
        self.subscription_id: str | None = settings.subscription_id

    def _az(self, *args: str) -> list[str]:
        return [self.settings.az_binary, *args]

    def authenticate(self) -> str:
        """
        Logs in with the service principal from the environment.

        Credentials are checked before anything is executed.
        """
        creds = self.settings.require_credentials()

        print("\n🔐 Authenticating...")
        login_command = self._az(
            "login", "--service-principal",
            "--username", creds.app_id,
            "--password", creds.client_secret,
            "--tenant", creds.tenant_id,
        )
        output = self.runner(login_command, secrets=[creds.client_secret])
        self.logged_in = True

        if self.settings.subscription_id:
            self.set_subscription(self.settings.subscription_id)
        return output

    def get_subscription_id(self) -> str:
        command = self._az("account", "show", "--output", "json")
        # stdout only; az writes update notices and deprecation warnings to stderr
        output = self.runner(command, merge_stderr=False)
        try:
            account = json.loads(output)
            return account["id"]
        except (ValueError, KeyError, TypeError):
            raise CommandError("unable to extract subscription ID from output", command, output=output)

    def set_subscription(self, subscription_id: str) -> str:
        output = self.runner(self._az("account", "set", "--subscription", subscription_id))
        self.subscription_id = subscription_id
        log(INFO, f"Set active subscription to: {subscription_id}")
        return output

    def status(self) -> SessionStatus:
        # `az account show` only succeeds with a cached login
        reported = self.get_subscription_id()
        self.logged_in = True
        if not self.settings.subscription_id:
            self.subscription_id = reported
        return SessionStatus(logged_in=self.logged_in, subscription_id=self.subscription_id)

    def build_invoke(self, command_args: list[str], directory: str = ".", recursive: bool = True,
                     resource_group: str | None = None, aks_name: str | None = None) -> str:
        resource_group, aks_name = self.settings.with_cluster(resource_group, aks_name).require_cluster()
        files = discover_files(directory, recursive=recursive)
        return assemble_invoke_command(command_args, resource_group, aks_name, files)

    def invoke(self, command_args: list[str], directory: str = ".", recursive: bool = True, dry_run: bool = False,
               resource_group: str | None = None, aks_name: str | None = None) -> str:
        """
        Runs a command on the cluster with every discovered file attached.

        With `dry_run` the assembled shell line is returned without running it.
        """
        full_command = self.build_invoke(command_args, directory, recursive, resource_group, aks_name)
        print(f"\n🚀 {full_command}")
        if dry_run:
            return full_command
        return self.runner([self.settings.shell, "-c", full_command])
