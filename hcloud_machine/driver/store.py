"""Persist machine records as YAML under the storage path.

Layout: ``<store_path>/machines/<name>/config.yaml``. Records never contain
the API token; it is supplied again on every invocation.
"""

import logging
import os
import shutil

import yaml

from hcloud_machine.driver.errors import MachineNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = "~/.hcloud-machine"
RECORD_FILE = "config.yaml"


def machine_dir(store_path, name):
    return os.path.join(os.path.expanduser(store_path), "machines", name)


def save_machine(store_path, record):
    """Write a machine record (see ``HetznerDriver.to_record``), replacing any previous one."""
    directory = machine_dir(store_path, record["name"])
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, RECORD_FILE)
    with open(path, "w") as f:
        yaml.safe_dump(record, f, default_flow_style=False, sort_keys=False)
    logger.debug(f"Saved machine record to {path}")
    return path


def machine_exists(store_path, name):
    return os.path.exists(os.path.join(machine_dir(store_path, name), RECORD_FILE))


def load_machine(store_path, name):
    """Return the stored record dict for *name*.

    Raises:
        MachineNotFoundError: no record exists.
    """
    path = os.path.join(machine_dir(store_path, name), RECORD_FILE)
    if not os.path.exists(path):
        raise MachineNotFoundError(f"Machine '{name}' not found in {os.path.expanduser(store_path)}")
    with open(path) as f:
        return yaml.safe_load(f) or {}


def remove_machine(store_path, name):
    directory = machine_dir(store_path, name)
    if os.path.isdir(directory):
        shutil.rmtree(directory)
        logger.debug(f"Removed {directory}")
