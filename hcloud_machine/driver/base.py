"""Driver contract shared by every machine provider."""

from typing import Protocol

from hcloud_machine.driver.config import Flag
from hcloud_machine.driver.errors import NotRunningError
from hcloud_machine.driver.types import CreateResult, State


class Driver(Protocol):
    """Operations the host tool invokes on a machine driver, one call at a time."""

    def driver_name(self) -> str: ...

    def create_flags(self) -> list[Flag]: ...

    def configure(self, params) -> None: ...

    def create(self) -> CreateResult: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def restart(self) -> None: ...

    def kill(self) -> None: ...

    def remove(self) -> None: ...

    def get_state(self) -> State: ...

    def get_ip(self) -> str: ...

    def get_url(self) -> str: ...

    def get_ssh_hostname(self) -> str: ...


def must_be_running(driver: Driver):
    """Raise NotRunningError unless the driver reports RUNNING.

    Errors from ``get_state`` propagate unchanged.
    """
    state = driver.get_state()
    if state != State.RUNNING:
        raise NotRunningError(state)
