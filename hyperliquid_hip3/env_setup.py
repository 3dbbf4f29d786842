"""Environment configuration setup utilities.

This module loads credentials from a .env file or the process environment.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from hyperliquid_hip3.errors import MissingCredentialsError
from hyperliquid_hip3.types import Credentials, Network

log = logging.getLogger(__name__)

PRIVATE_KEY_VAR = "HYPERLIQUID_PRIVATE_KEY"
NETWORK_VAR = "HYPERLIQUID_NETWORK"
VAULT_ADDRESS_VAR = "HYPERLIQUID_VAULT_ADDRESS"
WALLET_ADDRESS_VAR = "HYPERLIQUID_WALLET_ADDRESS"


def load_credentials(env_file: str | Path = ".env") -> Credentials:
    """Load Hyperliquid credentials from the environment.

    Loads variables from ``env_file`` if it exists, otherwise falls back to
    the process environment. Variables already set in the process environment
    take precedence over the file.

    Variables:
        HYPERLIQUID_PRIVATE_KEY: hex private key (required)
        HYPERLIQUID_NETWORK: ``mainnet`` (default) or ``testnet``
        HYPERLIQUID_VAULT_ADDRESS: optional vault / subaccount address
        HYPERLIQUID_WALLET_ADDRESS: optional wallet address override

    Returns:
        Credentials built from the environment

    Raises:
        MissingCredentialsError: If no private key is configured
        ValidationError: If the network is not mainnet or testnet

    """
    env_file_path = Path(env_file)
    if env_file_path.exists():
        log.info("Loading environment variables from %s", env_file_path)
        load_dotenv(env_file_path)
    else:
        log.info("%s not found. Falling back to process environment.", env_file_path)

    private_key = os.environ.get(PRIVATE_KEY_VAR, "")
    if not private_key:
        raise MissingCredentialsError(PRIVATE_KEY_VAR)

    network = Network.from_input(os.environ.get(NETWORK_VAR))
    log.info("Using %s network", network.value)

    return Credentials(
        private_key=private_key,
        network=network,
        vault_address=os.environ.get(VAULT_ADDRESS_VAR) or None,
        wallet_address=os.environ.get(WALLET_ADDRESS_VAR) or None,
    )
