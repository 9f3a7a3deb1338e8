"""Driver configuration: declared flags and parameter validation."""

from dataclasses import dataclass, field

from hcloud_machine.driver.errors import ConfigurationError

DEFAULT_IMAGE = "ubuntu-18.04"
DEFAULT_SERVER_TYPE = "cx11"


@dataclass(frozen=True)
class Flag:
    """A configuration parameter the host tool collects for this driver."""

    name: str
    env_var: str
    usage: str
    default: str | None = None
    required: bool = False


CREATE_FLAGS = [
    Flag("hcloud-token", "HCLOUD_TOKEN", "Hetzner Cloud API token", required=True),
    Flag("hcloud-image", "HCLOUD_IMAGE", "Image name or ID to boot the server from", default=DEFAULT_IMAGE, required=True),
    Flag("hcloud-type", "HCLOUD_TYPE", "Server type name or ID", default=DEFAULT_SERVER_TYPE, required=True),
    Flag("hcloud-location", "HCLOUD_LOCATION", "Location name or ID (e.g. fsn1)"),
    Flag("hcloud-datacenter", "HCLOUD_DATACENTER", "Datacenter name or ID (e.g. fsn1-dc14)"),
    Flag("hcloud-action-timeout", "HCLOUD_ACTION_TIMEOUT", "Seconds to wait for a server action (default: no limit)"),
]


@dataclass
class DriverConfig:
    """Validated driver parameters. Immutable once the driver is configured."""

    token: str = field(repr=False)
    image: str
    server_type: str
    location: str | None = None
    datacenter: str | None = None
    action_timeout: int | None = None


def _parse_timeout(value):
    if not value:
        return None
    try:
        timeout = int(value)
    except ValueError:
        raise ConfigurationError(f"--hcloud-action-timeout must be an integer, got '{value}'") from None
    if timeout <= 0:
        raise ConfigurationError(f"--hcloud-action-timeout must be positive, got {timeout}")
    return timeout


def resolve_config(params):
    """Validate flag values and bind them into a DriverConfig.

    Args:
        params: mapping of flag name (e.g. ``hcloud-token``) to string value.
            Missing keys and empty strings are treated the same.

    Raises:
        ConfigurationError: a required flag is empty or a value is malformed.
    """
    values = {flag.name: (params.get(flag.name) or "").strip() for flag in CREATE_FLAGS}

    for flag in CREATE_FLAGS:
        if flag.required and not values[flag.name]:
            raise ConfigurationError(f"--{flag.name} option is required")

    return DriverConfig(
        token=values["hcloud-token"],
        image=values["hcloud-image"],
        server_type=values["hcloud-type"],
        location=values["hcloud-location"] or None,
        datacenter=values["hcloud-datacenter"] or None,
        action_timeout=_parse_timeout(values["hcloud-action-timeout"]),
    )
