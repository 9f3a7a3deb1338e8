"""Machine driver: lifecycle operations, action waiting, state mapping, config."""

from hcloud_machine.driver.actions import wait_for_action, wait_for_actions
from hcloud_machine.driver.base import Driver, must_be_running
from hcloud_machine.driver.config import CREATE_FLAGS, DriverConfig, Flag, resolve_config
from hcloud_machine.driver.errors import (
    ActionCancelledError,
    ActionFailedError,
    ActionTimeoutError,
    ConfigurationError,
    CreateError,
    DriverError,
    MachineNotCreatedError,
    MachineNotFoundError,
    NotRunningError,
    ResourceNotFoundError,
    StateQueryError,
)
from hcloud_machine.driver.hetzner import HetznerDriver
from hcloud_machine.driver.state import map_server_status
from hcloud_machine.driver.store import load_machine, machine_exists, remove_machine, save_machine
from hcloud_machine.driver.types import CreateResult, MachineInfo, State

__all__ = [
    "Driver",
    "HetznerDriver",
    "must_be_running",
    "wait_for_action",
    "wait_for_actions",
    "map_server_status",
    "resolve_config",
    "CREATE_FLAGS",
    "DriverConfig",
    "Flag",
    "State",
    "MachineInfo",
    "CreateResult",
    "save_machine",
    "load_machine",
    "machine_exists",
    "remove_machine",
    "DriverError",
    "ConfigurationError",
    "ResourceNotFoundError",
    "MachineNotCreatedError",
    "MachineNotFoundError",
    "ActionFailedError",
    "ActionTimeoutError",
    "ActionCancelledError",
    "CreateError",
    "StateQueryError",
    "NotRunningError",
]
