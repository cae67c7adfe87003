"""Config management commands."""

import sys
from pathlib import Path

import cyclopts
import yaml

from dehug.cli.console import get_console
from dehug.config import Config

app = cyclopts.App(name="config", help="Manage DeHug configuration")

TEMPLATE = """\
# DeHug client configuration
# Point DEHUG_CONFIG_FILE at this file, or override any key with
# DEHUG_<SECTION>__<KEY> environment variables.

registry:
  address: "0x0000000000000000000000000000000000000000"  # Registry contract - please update!
  # id_offset: 1  # First id the registry assigns

network:
  chain_id: 42101
  name: "Push Chain Donut Testnet"
  rpc_url: "https://evm.rpc-testnet-donut-node1.push.org"
  explorer_url: "https://donut.push.network"
  # strict_chain_check: false
  # confirmation_timeout: 300  # Seconds; unset waits indefinitely

storage:
  gateway_url: "https://ipfs.io/ipfs/"

# discovery:
#   limit: 10
#   max_scan: 50
#   batch_prefilter: false

# Signer endpoint for uploads and download-count updates
# wallet:
#   signer_url: "http://localhost:8545"
#   account: null  # Defaults to the signer's first account

# logging:
#   level: "INFO"
"""

DEFAULT_CONFIG_NAME = "dehug.yaml"


@app.command
def init(path: Path = Path(DEFAULT_CONFIG_NAME), force: bool = False) -> None:
    """Create a new config file from template.

    Args:
        path: Path for the config file. Defaults to ./dehug.yaml
        force: Overwrite an existing file
    """
    console = get_console()
    if path.exists() and not force:
        console.error(f"{path} already exists", hint="Use --force to overwrite")
        sys.exit(1)

    path.write_text(TEMPLATE)
    console.success(f"Wrote {path}")
    console.info(f"export DEHUG_CONFIG_FILE={path.resolve()}")


@app.command
def show() -> None:
    """Print the effective configuration."""
    config = Config()
    get_console().print(yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False))
