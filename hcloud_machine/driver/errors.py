"""Exception hierarchy for the machine driver.

Provider-call failures (``hcloud.APIException`` and transport errors) are not
wrapped here; they propagate to the caller unchanged.
"""

from hcloud_machine.driver.types import State


class DriverError(Exception):
    """Base class for all driver errors."""


class ConfigurationError(DriverError):
    """A required parameter is missing or invalid, or the driver is not configured."""


class ResourceNotFoundError(DriverError):
    def __init__(self, kind, identifier):
        super().__init__(f"{kind} '{identifier}' not found")
        self.kind = kind
        self.identifier = identifier


class MachineNotCreatedError(DriverError):
    """The driver has no server bound yet."""


class MachineNotFoundError(DriverError):
    """No persisted record exists for the requested machine."""


class ActionError(DriverError):
    def __init__(self, action, message):
        super().__init__(message)
        self.action = action


class ActionFailedError(ActionError):
    """The provider accepted the action but reported it as failed."""

    def __init__(self, action):
        error = action.error or {}
        self.code = error.get("code", "unknown")
        self.error_message = error.get("message", "")
        super().__init__(action, f"'{action.command}' action failed: {self.code}: {self.error_message}")


class ActionTimeoutError(ActionError):
    def __init__(self, action, timeout):
        super().__init__(action, f"Timeout after {timeout}s waiting for '{action.command}' action")
        self.timeout = timeout


class ActionCancelledError(ActionError):
    def __init__(self, action):
        super().__init__(action, f"Cancelled while waiting for '{action.command}' action")


class CreateError(DriverError):
    """Server creation was accepted but did not complete.

    Carries the identity of the half-created server so the caller can clean
    it up; the driver itself stays unbound.
    """

    def __init__(self, server_id, ip_address, message):
        super().__init__(message)
        self.server_id = server_id
        self.ip_address = ip_address


class StateQueryError(DriverError):
    """The server could not be looked up while querying its state."""

    state = State.ERROR


class NotRunningError(DriverError):
    def __init__(self, state):
        super().__init__(f"Host is not running (state: {state})")
        self.state = state
