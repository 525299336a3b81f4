import json

import pytest

from xks.config import AksSettings
from xks.errors import CommandError
from xks.session import AzureSession

ENV = {
    "AZURE_APP_ID": "app-id",
    "AZURE_CLIENT_SECRET": "s3cret",
    "AZURE_TENANT_ID": "tenant-id",
    "RESOURCEGROUP": "rg-dev",
    "AKSNAME": "aks-dev",
}


class FakeRunner:
    """Records every command instead of executing it."""

    def __init__(self, outputs=None, fail_on=None):
        self.calls = []
        self.merged = []
        self.outputs = outputs or {}
        self.fail_on = fail_on

    def __call__(self, command, secrets=(), merge_stderr=True):
        self.calls.append(list(command))
        self.merged.append(merge_stderr)
        key = " ".join(command[1:3])
        if self.fail_on and self.fail_on in " ".join(command):
            raise CommandError("boom", command, returncode=1, output="ERROR: Please run 'az login'")
        return self.outputs.get(key, "")


@pytest.fixture
def account_json():
    return json.dumps({"id": "sub-from-az", "name": "Dev"})


@pytest.fixture
def runner(account_json):
    return FakeRunner(outputs={"account show": account_json})


@pytest.fixture
def env(monkeypatch):
    for name in ("AZURE_SUBSCRIPTION_ID", "XKS_AZ_BINARY", "XKS_SHELL"):
        monkeypatch.delenv(name, raising=False)
    for name, value in ENV.items():
        monkeypatch.setenv(name, value)
    return ENV


@pytest.fixture
def session(runner):
    return AzureSession(AksSettings.from_env(ENV), runner=runner)
