"""Wait for Hetzner Cloud actions to reach a terminal status."""

import logging
import time

from hcloud.actions import Action

from hcloud_machine.driver.errors import ActionCancelledError, ActionFailedError, ActionTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1


def wait_for_action(action, timeout=None, interval=DEFAULT_POLL_INTERVAL, cancel_event=None):
    """Block until *action* finishes, polling its status every *interval* seconds.

    Intermediate progress is only logged at debug level; the start and end of
    the wait are logged at info level with the action's command.

    Args:
        action: a bound hcloud action (anything with ``command``, ``status``,
            ``progress``, ``error`` and ``reload()``).
        timeout: seconds to wait before giving up. None waits until the
            provider reports a terminal status.
        interval: seconds between status polls.
        cancel_event: optional ``threading.Event``; setting it aborts the wait.

    Raises:
        ActionFailedError: the provider reported the action as failed.
        ActionTimeoutError: *timeout* elapsed while the action was running.
        ActionCancelledError: *cancel_event* was set while waiting.
    """
    logger.info(f"Waiting for '{action.command}' action to complete...")

    deadline = None if timeout is None else time.monotonic() + timeout
    last_progress = None
    while action.status == Action.STATUS_RUNNING:
        if action.progress != last_progress:
            logger.debug(f"'{action.command}' action progress: {action.progress}%")
            last_progress = action.progress
        if deadline is not None and time.monotonic() >= deadline:
            raise ActionTimeoutError(action, timeout)
        if cancel_event is not None:
            if cancel_event.wait(interval):
                raise ActionCancelledError(action)
        else:
            time.sleep(interval)
        action.reload()

    if action.status == Action.STATUS_ERROR:
        raise ActionFailedError(action)

    logger.info(f"'{action.command}' action succeeded.")


def wait_for_actions(actions, timeout=None, interval=DEFAULT_POLL_INTERVAL, cancel_event=None):
    """Wait for each action in turn; stops at the first failure."""
    for action in actions:
        wait_for_action(action, timeout=timeout, interval=interval, cancel_event=cancel_event)
