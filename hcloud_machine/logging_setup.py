"""CLI logging setup: plain %(message)s format on stdout."""

import logging
import sys

from hcloud_machine.redact import SecretRedactingFilter


def setup_cli_logging(verbose=False):
    """Configure the root logger for CLI commands.

    Handler-level redaction covers records from every logger, including the
    hcloud client's, since logger filters do not apply to propagated records.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(SecretRedactingFilter())
    root.addHandler(handler)
