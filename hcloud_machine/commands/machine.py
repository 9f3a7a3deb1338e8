"""Machine lifecycle CLI handlers."""

import logging
import os
import sys

import requests
from hcloud import APIException

from hcloud_machine.driver import (
    CREATE_FLAGS,
    CreateError,
    DriverError,
    HetznerDriver,
    MachineInfo,
    StateQueryError,
    load_machine,
    machine_exists,
    remove_machine,
    save_machine,
)
from hcloud_machine.redact import register_secret

logger = logging.getLogger(__name__)

TOKEN_FLAG = CREATE_FLAGS[0]


def _fail(message):
    logger.error(f"Error: {message}")
    sys.exit(1)


def _flag_params(args):
    """Collect declared flag values from parsed args, keyed by flag name."""
    params = {}
    for flag in CREATE_FLAGS:
        value = getattr(args, flag.name.replace("-", "_"), None)
        if value is not None:
            params[flag.name] = value
    return params


def _load_driver(args):
    record = load_machine(args.storage_path, args.name)
    register_secret(args.hcloud_token)
    return HetznerDriver.from_record(record, args.hcloud_token, os.path.expanduser(args.storage_path))


def _run(args, operation):
    """Load the machine, apply *operation* and exit 1 on any driver or API error."""
    try:
        driver = _load_driver(args)
        return operation(driver)
    except (DriverError, APIException, requests.exceptions.RequestException) as e:
        _fail(e)


# ── CLI handlers ───────────────────────────────────────────────────


def handle_create(args):
    """CLI handler for 'create'."""
    if machine_exists(args.storage_path, args.name):
        _fail(f"Machine '{args.name}' already exists")

    params = _flag_params(args)
    register_secret(params.get(TOKEN_FLAG.name))
    driver = HetznerDriver(MachineInfo(name=args.name, store_path=os.path.expanduser(args.storage_path)))
    try:
        driver.configure(params)
        result = driver.create()
    except CreateError as e:
        # Keep the half-created server on record so 'rm' can clean it up.
        record = driver.to_record()
        record["server_id"] = e.server_id
        record["ip_address"] = e.ip_address
        save_machine(args.storage_path, record)
        _fail(f"{e}. Run 'rm {args.name}' to delete it.")
    except (DriverError, APIException, requests.exceptions.RequestException) as e:
        _fail(e)

    save_machine(args.storage_path, driver.to_record())
    logger.info(f"Machine '{args.name}' created (server id={result.server_id}).")
    logger.info(f"IP:       {result.ip_address}")
    logger.info(f"Connect:  ssh {driver.get_ssh_username()}@{result.ip_address}")


def handle_start(args):
    _run(args, lambda driver: driver.start())
    logger.info(f"Machine '{args.name}' started.")


def handle_stop(args):
    _run(args, lambda driver: driver.stop())
    logger.info(f"Machine '{args.name}' stopped.")


def handle_restart(args):
    _run(args, lambda driver: driver.restart())
    logger.info(f"Machine '{args.name}' restarted.")


def handle_kill(args):
    _run(args, lambda driver: driver.kill())
    logger.info(f"Machine '{args.name}' powered off.")


def handle_remove(args):
    _run(args, lambda driver: driver.remove())
    remove_machine(args.storage_path, args.name)
    logger.info(f"Machine '{args.name}' removed.")


def handle_status(args):
    try:
        driver = _load_driver(args)
        state = driver.get_state()
    except StateQueryError as e:
        logger.info(str(e.state))
        _fail(e)
    except (DriverError, APIException, requests.exceptions.RequestException) as e:
        _fail(e)
    logger.info(str(state))


def handle_ip(args):
    logger.info(_run(args, lambda driver: driver.get_ip()))


def handle_url(args):
    logger.info(_run(args, lambda driver: driver.get_url()))


# ── Registration ───────────────────────────────────────────────────


def _add_flag_argument(parser, flag):
    default = os.environ.get(flag.env_var, flag.default)
    help_text = f"{flag.usage} (env: {flag.env_var})"
    if flag.default:
        help_text = f"{flag.usage} (default: {flag.default}, env: {flag.env_var})"
    parser.add_argument(f"--{flag.name}", default=default, help=help_text)


def register_machine_commands(subparsers):
    """Register create and the per-machine lifecycle commands."""
    create_parser = subparsers.add_parser("create", help="Create a Hetzner Cloud server")
    create_parser.add_argument("name", help="Machine name (also used as the server name)")
    for flag in CREATE_FLAGS:
        _add_flag_argument(create_parser, flag)
    create_parser.set_defaults(func=handle_create)

    commands = [
        ("start", "Power on a machine", handle_start),
        ("stop", "Gracefully shut down a machine", handle_stop),
        ("restart", "Reboot a machine", handle_restart),
        ("kill", "Power off a machine without shutdown", handle_kill),
        ("rm", "Delete a machine's server and its record", handle_remove),
        ("status", "Print a machine's state", handle_status),
        ("ip", "Print a running machine's IPv4 address", handle_ip),
        ("url", "Print a running machine's Docker URL", handle_url),
    ]
    for name, help_text, func in commands:
        parser = subparsers.add_parser(name, help=help_text)
        parser.add_argument("name", help="Machine name")
        _add_flag_argument(parser, TOKEN_FLAG)
        parser.set_defaults(func=func)
