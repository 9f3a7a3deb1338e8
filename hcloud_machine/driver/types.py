"""Shared data types for the machine driver."""

import os
from dataclasses import dataclass
from enum import Enum


class State(Enum):
    """Lifecycle state of a machine, independent of the provider's vocabulary."""

    RUNNING = "Running"
    STOPPED = "Stopped"
    STARTING = "Starting"
    STOPPING = "Stopping"
    ERROR = "Error"

    def __str__(self):
        return self.value


@dataclass
class MachineInfo:
    """Host-tool side identity of a machine: name, store location and SSH settings."""

    name: str
    store_path: str
    ssh_user: str = "root"
    ssh_port: int = 22

    @property
    def machine_dir(self) -> str:
        return os.path.join(self.store_path, "machines", self.name)

    @property
    def ssh_key_path(self) -> str:
        return os.path.join(self.machine_dir, "id_rsa")


@dataclass
class CreateResult:
    """Structured return from a successful create."""

    server_id: int
    ip_address: str | None
    root_password: str | None = None
