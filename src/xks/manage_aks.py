"""
==============================================================================

          `xks <COMMAND> <OPTIONS>` -- Azure AKS management utility!

  This Typer application wraps the Azure CLI to authenticate with a service
  principal, switch subscriptions and run commands on an AKS cluster with
  every file in the working directory attached.

  Environment:
    AZURE_APP_ID, AZURE_CLIENT_SECRET, AZURE_TENANT_ID   (auth)
    RESOURCEGROUP, AKSNAME                               (invoke)
    AZURE_SUBSCRIPTION_ID                                (optional override)

==============================================================================
"""

import logging

import typer

import xks.command_groups.account as account
import xks.command_groups.aks as aks
from xks.command_groups.commander import run_command
from xks.config import AksSettings
from xks.session import AzureSession

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level."),
):
    """
    A tool to simplify managing Azure AKS clusters with automatic file
    attachment and subscription management.
    """
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(message)s")
    ctx.obj = AzureSession(AksSettings.from_env(), runner=run_command)


# Unnamed sub-apps merge their commands into the top level: xks auth, xks invoke, ...
app.add_typer(account.app)
app.add_typer(aks.app)


if __name__ == "__main__":
    app()
