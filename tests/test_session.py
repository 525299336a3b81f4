import pytest

from xks.config import AksSettings
from xks.errors import CommandError, MissingEnvironmentError
from xks.session import AzureSession

from conftest import ENV, FakeRunner


def test_authenticate_runs_service_principal_login(session, runner):
    session.authenticate()
    assert runner.calls == [[
        "az", "login", "--service-principal",
        "--username", "app-id", "--password", "s3cret", "--tenant", "tenant-id",
    ]]
    assert session.logged_in is True


def test_authenticate_without_credentials_runs_nothing(runner):
    session = AzureSession(AksSettings.from_env({"AZURE_APP_ID": "app-id"}), runner=runner)
    with pytest.raises(MissingEnvironmentError):
        session.authenticate()
    assert runner.calls == []
    assert session.logged_in is False


def test_authenticate_applies_subscription_override(runner):
    settings = AksSettings.from_env({**ENV, "AZURE_SUBSCRIPTION_ID": "sub-override"})
    session = AzureSession(settings, runner=runner)
    session.authenticate()
    assert runner.calls[-1] == ["az", "account", "set", "--subscription", "sub-override"]


def test_authenticate_failure_keeps_logged_out():
    session = AzureSession(AksSettings.from_env(ENV), runner=FakeRunner(fail_on="login"))
    with pytest.raises(CommandError):
        session.authenticate()
    assert session.logged_in is False


def test_get_subscription_id(session):
    assert session.get_subscription_id() == "sub-from-az"


def test_get_subscription_id_rejects_garbage():
    session = AzureSession(AksSettings.from_env(ENV), runner=FakeRunner(outputs={"account show": "not json"}))
    with pytest.raises(CommandError, match="unable to extract subscription ID"):
        session.get_subscription_id()


def test_set_subscription(session, runner):
    session.set_subscription("sub-2")
    assert runner.calls == [["az", "account", "set", "--subscription", "sub-2"]]
    assert session.subscription_id == "sub-2"


def test_status_reports_az_subscription(session):
    current = session.status()
    assert current.logged_in is True
    assert current.subscription_id == "sub-from-az"


def test_status_reports_override(runner):
    settings = AksSettings.from_env({**ENV, "AZURE_SUBSCRIPTION_ID": "sub-override"})
    current = AzureSession(settings, runner=runner).status()
    assert current.subscription_id == "sub-override"


def test_status_when_logged_out():
    session = AzureSession(AksSettings.from_env(ENV), runner=FakeRunner(fail_on="account show"))
    with pytest.raises(CommandError):
        session.status()
    assert session.logged_in is False


def test_invoke_runs_assembled_line_in_shell(session, runner, tmp_path):
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.yaml").write_text("b")
    session.invoke(["kubectl", "apply", "-f", "."], directory=str(tmp_path))
    shell, flag, line = runner.calls[0]
    assert (shell, flag) == ("bash", "-c")
    assert line.startswith("az aks command invoke --resource-group rg-dev --name aks-dev")
    assert line.count("--file") == 2


def test_invoke_dry_run_executes_nothing(session, runner, tmp_path):
    line = session.invoke(["kubectl", "get", "pods"], directory=str(tmp_path), dry_run=True)
    assert runner.calls == []
    assert "--file" not in line


def test_invoke_requires_cluster(runner, tmp_path):
    session = AzureSession(AksSettings.from_env({}), runner=runner)
    with pytest.raises(MissingEnvironmentError):
        session.invoke(["kubectl", "get", "pods"], directory=str(tmp_path))
    assert runner.calls == []


def test_subscription_lookup_reads_stdout_only(session, runner):
    session.get_subscription_id()
    assert runner.merged == [False]


def test_invoke_keeps_combined_transcript(session, runner, tmp_path):
    session.invoke(["kubectl", "get", "pods"], directory=str(tmp_path))
    assert runner.merged == [True]
