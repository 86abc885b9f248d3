"""Toolchain descriptors."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToolchainSpec:
    """
    Naming conventions of an installable toolchain distribution.

    Attributes:
        name: Archive/binary prefix (e.g. 'go' in 'go1.21.0.linux-amd64.tar.gz')
        download_host: Host serving ``/dl/`` archives
        root_variable: Environment variable pointing at the toolchain root
        path_variable: Workspace path variable queried from the toolchain
        env_banner: Prefix of the logged environment report
    """

    name: str
    download_host: str
    root_variable: str
    path_variable: str
    env_banner: str

    @property
    def env_command(self) -> str:
        return f"{self.name} env"


GO = ToolchainSpec(
    name="go",
    download_host="go.dev",
    root_variable="GOROOT",
    path_variable="GOPATH",
    env_banner="Go env:",
)
