import typer

from xks.command_groups.commander import abort
from xks.errors import XksError
from xks.session import AzureSession

app = typer.Typer()


@app.command()
def auth(ctx: typer.Context):
    """
    Authenticate with Azure using the service principal from the environment.

    Reads AZURE_APP_ID, AZURE_CLIENT_SECRET and AZURE_TENANT_ID.
    """
    session: AzureSession = ctx.obj
    try:
        session.authenticate()
    except XksError as e:
        if session.logged_in:
            # login went through, only the subscription override was rejected
            raise abort(f"failed to set subscription: {e}")
        raise abort(f"authentication failed: {e}")
    print("✅ Authenticated successfully!")
    if session.subscription_id:
        print(f"Active subscription: {session.subscription_id}")


@app.command()
def sub(
    ctx: typer.Context,
    subscription_id: str = typer.Argument(..., help="Subscription to make active."),
):
    """
    Set the active Azure subscription used by all following commands.
    """
    session: AzureSession = ctx.obj
    try:
        session.set_subscription(subscription_id)
    except XksError as e:
        raise abort(f"failed to set subscription: {e}")
    print(f"Set active subscription to: {subscription_id}")


@app.command()
def status(ctx: typer.Context):
    """
    Show the current login state and subscription.
    """
    session: AzureSession = ctx.obj
    try:
        current = session.status()
    except XksError as e:
        raise abort(f"not logged in - run 'xks auth' first\n{e}")
    print("Current Status:")
    print(f"  Logged In: {current.logged_in}")
    print(f"  Subscription ID: {current.subscription_id}")
