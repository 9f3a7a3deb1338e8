"""Hetzner Cloud driver: create, power-cycle, inspect and remove a single server.

Every provider call goes through the ``hcloud.Client`` built by
``configure()``. Calls that start a server action hand the action to
``wait_for_action`` before returning; ``remove`` does not wait.
"""

import logging

import requests
from hcloud import APIException, Client

from hcloud_machine import __version__
from hcloud_machine.driver.actions import wait_for_action, wait_for_actions
from hcloud_machine.driver.base import must_be_running
from hcloud_machine.driver.config import CREATE_FLAGS, DriverConfig, resolve_config
from hcloud_machine.driver.errors import (
    ActionError,
    ConfigurationError,
    CreateError,
    DriverError,
    MachineNotCreatedError,
    ResourceNotFoundError,
    StateQueryError,
)
from hcloud_machine.driver.state import map_server_status
from hcloud_machine.driver.types import CreateResult, MachineInfo

logger = logging.getLogger(__name__)

DRIVER_NAME = "hcloud"
APPLICATION_NAME = "hcloud-machine"
DOCKER_PORT = 2376
NOT_FOUND = "not_found"


def is_not_found(exc):
    """True if *exc* is a provider error reporting a missing resource."""
    return isinstance(exc, APIException) and exc.code == NOT_FOUND


def _resolve(resources, kind, identifier, get_by_name=None):
    """Look up a provider resource by numeric ID or by name.

    Raises:
        ResourceNotFoundError: nothing matches *identifier*.
    """
    if identifier.isascii() and identifier.isdigit():
        try:
            return resources.get_by_id(int(identifier))
        except APIException as e:
            if is_not_found(e):
                raise ResourceNotFoundError(kind, identifier) from e
            raise

    resource = (get_by_name or resources.get_by_name)(identifier)
    if resource is None:
        raise ResourceNotFoundError(kind, identifier)
    return resource


def _public_ipv4(server):
    public_net = server.public_net
    if public_net is None or public_net.ipv4 is None:
        return None
    return public_net.ipv4.ip


class HetznerDriver:
    """Lifecycle driver for one Hetzner Cloud server.

    ``server_id`` and ``ip_address`` stay unset until ``create`` fully
    succeeds; every other operation refuses to run before that.
    """

    def __init__(self, machine: MachineInfo):
        self.machine = machine
        self.config: DriverConfig | None = None
        self.client: Client | None = None
        self._server_id: int | None = None
        self._ip_address: str | None = None

    @classmethod
    def from_record(cls, record, token, store_path):
        """Rebuild a configured driver from a persisted machine record."""
        driver = cls(MachineInfo(name=record["name"], store_path=store_path))
        driver.configure(
            {
                "hcloud-token": token,
                "hcloud-image": record.get("image"),
                "hcloud-type": record.get("server_type"),
                "hcloud-location": record.get("location"),
                "hcloud-datacenter": record.get("datacenter"),
                "hcloud-action-timeout": str(record.get("action_timeout") or ""),
            }
        )
        driver._server_id = record.get("server_id")
        driver._ip_address = record.get("ip_address")
        return driver

    def to_record(self):
        """Serializable machine record. The API token is never included."""
        config = self.config
        return {
            "driver": DRIVER_NAME,
            "name": self.machine.name,
            "image": config.image if config else None,
            "server_type": config.server_type if config else None,
            "location": config.location if config else None,
            "datacenter": config.datacenter if config else None,
            "action_timeout": config.action_timeout if config else None,
            "server_id": self._server_id,
            "ip_address": self._ip_address,
        }

    @property
    def server_id(self):
        return self._server_id

    @property
    def ip_address(self):
        return self._ip_address

    # ── Host tool contract ────────────────────────────────────────

    def driver_name(self):
        return DRIVER_NAME

    def create_flags(self):
        return list(CREATE_FLAGS)

    def configure(self, params):
        """Validate *params* and build the authenticated provider client.

        Raises:
            ConfigurationError: a required parameter is missing. No client is
                built in that case.
        """
        config = resolve_config(params)
        self.config = config
        self.client = Client(
            token=config.token,
            application_name=APPLICATION_NAME,
            application_version=__version__,
        )

    def create(self):
        """Provision the server and wait until the provider reports it ready.

        Returns:
            CreateResult with the new server's ID, IPv4 and root password.

        Raises:
            ResourceNotFoundError: server type, image, datacenter or location
                does not exist.
            CreateError: the server was created but its actions did not
                succeed. The error carries the server's ID and IPv4; the
                driver stays unbound.
        """
        client = self._client()
        if self._server_id is not None:
            raise DriverError(f"Machine '{self.machine.name}' is already bound to server {self._server_id}")

        config = self.config
        server_type = _resolve(client.server_types, "server type", config.server_type)
        image = _resolve(
            client.images,
            "image",
            config.image,
            get_by_name=lambda name: client.images.get_by_name_and_architecture(name, server_type.architecture),
        )
        create_kwargs = dict(name=self.machine.name, server_type=server_type, image=image)
        location = None
        if config.location:
            location = _resolve(client.locations, "location", config.location)
        if config.datacenter:
            # Servers are placed by location; a datacenter pins the location it belongs to.
            datacenter = _resolve(client.datacenters, "datacenter", config.datacenter)
            if location is not None and location.name != datacenter.location.name:
                raise ConfigurationError(
                    f"Datacenter '{config.datacenter}' is in location '{datacenter.location.name}', not '{location.name}'"
                )
            location = datacenter.location
        if location is not None:
            create_kwargs["location"] = location

        logger.info(f"Creating Hetzner Cloud server '{self.machine.name}' (type={config.server_type}, image={config.image})...")
        response = client.servers.create(**create_kwargs)
        server = response.server
        ip_address = _public_ipv4(server)
        logger.info(f"Server created (id={server.id}, ip={ip_address}).")

        try:
            wait_for_action(response.action, timeout=config.action_timeout)
            wait_for_actions(response.next_actions or [], timeout=config.action_timeout)
        except (ActionError, APIException, requests.exceptions.RequestException) as e:
            raise CreateError(server.id, ip_address, f"Server {server.id} was created but did not become ready: {e}") from e

        self._server_id = server.id
        self._ip_address = ip_address
        return CreateResult(server_id=server.id, ip_address=ip_address, root_password=response.root_password)

    def start(self):
        self._run_server_action("power_on")

    def stop(self):
        """Gracefully shut the server down (ACPI)."""
        self._run_server_action("shutdown")

    def restart(self):
        self._run_server_action("reboot")

    def kill(self):
        """Cut power to the server without a graceful shutdown."""
        self._run_server_action("power_off")

    def remove(self):
        """Delete the server. A server that no longer exists counts as removed."""
        try:
            server = self._get_server()
        except APIException as e:
            if is_not_found(e):
                logger.info(f"Hetzner Cloud server {self._server_id} does not exist.")
                return
            raise
        self.client.servers.delete(server)
        logger.info(f"Hetzner Cloud server {server.id} deleted.")

    def get_state(self):
        """Current lifecycle state of the server.

        Raises:
            StateQueryError: the server could not be looked up (including when
                it no longer exists).
        """
        try:
            server = self._get_server()
        except (APIException, requests.exceptions.RequestException) as e:
            raise StateQueryError(f"Cannot look up server {self._server_id}: {e}") from e
        return map_server_status(server.status)

    def get_ip(self):
        must_be_running(self)
        if not self._ip_address:
            raise DriverError(f"Server {self._server_id} has no public IPv4 address")
        return self._ip_address

    def get_ssh_hostname(self):
        return self.get_ip()

    def get_url(self):
        ip = self.get_ip()
        return f"tcp://{ip}:{DOCKER_PORT}"

    def get_ssh_username(self):
        return self.machine.ssh_user

    def get_ssh_port(self):
        return self.machine.ssh_port

    def get_ssh_key_path(self):
        return self.machine.ssh_key_path

    # ── Internals ─────────────────────────────────────────────────

    def _client(self):
        if self.client is None:
            raise ConfigurationError(f"Driver for '{self.machine.name}' is not configured")
        return self.client

    def _get_server(self):
        client = self._client()
        if self._server_id is None:
            raise MachineNotCreatedError(f"Machine '{self.machine.name}' has not been created")
        return client.servers.get_by_id(self._server_id)

    def _run_server_action(self, method):
        # The provider wants a live server object, not just an ID.
        server = self._get_server()
        action = getattr(self.client.servers, method)(server)
        wait_for_action(action, timeout=self.config.action_timeout)
