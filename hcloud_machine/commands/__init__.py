"""CLI command registration."""

from hcloud_machine.commands.machine import register_machine_commands

__all__ = ["register_machine_commands"]
