import os
from dataclasses import dataclass, replace
from typing import Mapping

from xks.errors import MissingEnvironmentError

CREDENTIAL_VARS = ("AZURE_APP_ID", "AZURE_CLIENT_SECRET", "AZURE_TENANT_ID")
CLUSTER_VARS = ("RESOURCEGROUP", "AKSNAME")


@dataclass(frozen=True)
class Credentials:
    app_id: str
    client_secret: str
    tenant_id: str


@dataclass(frozen=True)
class AksSettings:
    """
    Everything xks reads from the environment, loaded once at startup.

    :app_id, client_secret, tenant_id:: STRING (OPTIONAL)
        Service principal credentials. Only `auth` requires them.
    :resource_group, aks_name:: STRING (OPTIONAL)
        Target cluster coordinates. Only `invoke` requires them.
    :subscription_id:: STRING (OPTIONAL)
        Subscription override; when set, `status` reports it and `auth`
        activates it after logging in.
    :az_binary:: STRING (default = az)
    :shell:: STRING (default = bash)
        Shell used to run the assembled `az aks command invoke` line.
    """
    app_id: str | None = None
    client_secret: str | None = None
    tenant_id: str | None = None
    resource_group: str | None = None
    aks_name: str | None = None
    subscription_id: str | None = None
    az_binary: str = "az"
    shell: str = "bash"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AksSettings":
        env = os.environ if environ is None else environ

        def get(name: str) -> str | None:
            # Empty values count as unset
            return env.get(name) or None

        return cls(
            app_id=get("AZURE_APP_ID"),
            client_secret=get("AZURE_CLIENT_SECRET"),
            tenant_id=get("AZURE_TENANT_ID"),
            resource_group=get("RESOURCEGROUP"),
            aks_name=get("AKSNAME"),
            subscription_id=get("AZURE_SUBSCRIPTION_ID"),
            az_binary=get("XKS_AZ_BINARY") or "az",
            shell=get("XKS_SHELL") or "bash",
        )

    def require_credentials(self) -> Credentials:
        values = (self.app_id, self.client_secret, self.tenant_id)
        missing = [name for name, value in zip(CREDENTIAL_VARS, values) if not value]
        if missing:
            raise MissingEnvironmentError(missing)
        return Credentials(*values)

    def require_cluster(self) -> tuple[str, str]:
        values = (self.resource_group, self.aks_name)
        missing = [name for name, value in zip(CLUSTER_VARS, values) if not value]
        if missing:
            raise MissingEnvironmentError(missing)
        return self.resource_group, self.aks_name

    def with_cluster(self, resource_group: str | None = None, aks_name: str | None = None) -> "AksSettings":
        return replace(
            self,
            resource_group=resource_group or self.resource_group,
            aks_name=aks_name or self.aks_name,
        )
