"""Map Hetzner Cloud server status onto the driver's lifecycle states."""

import logging

from hcloud_machine.driver.types import State

logger = logging.getLogger(__name__)

_STATUS_TO_STATE = {
    "running": State.RUNNING,
    "off": State.STOPPED,
    "stopping": State.STOPPING,
    "starting": State.STARTING,
    "initializing": State.STARTING,
}


def map_server_status(status: str) -> State:
    """Return the lifecycle state for a provider server status.

    Statuses outside the table (deleting, migrating, rebuilding, unknown)
    report RUNNING, never ERROR.
    """
    state = _STATUS_TO_STATE.get(status)
    if state is None:
        logger.debug(f"Unmapped server status '{status}', reporting {State.RUNNING}")
        return State.RUNNING
    return state
