"""Signing identity derived from the account's private key."""

import logging
from dataclasses import dataclass

import eth_keys.datatypes

from hyperliquid_hip3.errors import MissingCredentialsError, SigningError
from hyperliquid_hip3.types import Credentials

log = logging.getLogger(__name__)


def parse_private_key(private_key: str) -> eth_keys.datatypes.PrivateKey:
    """Parse a hex private key, with or without ``0x`` prefix.

    Raises:
        MissingCredentialsError: If the key is empty
        SigningError: If the key is not a valid secp256k1 private key

    """
    if not private_key:
        raise MissingCredentialsError("Private key")
    private_key = private_key.strip()
    if private_key.startswith("0x"):
        private_key = private_key[2:]
    try:
        private_key_bytes = bytes.fromhex(private_key)
        return eth_keys.datatypes.PrivateKey(private_key_bytes)
    except Exception:
        # don't chain the original message, it may echo key material
        raise SigningError("Invalid private key material") from None


@dataclass(frozen=True, repr=False)
class SigningIdentity:
    """The key that signs actions plus the addresses it trades for.

    ``vault_address`` is the account the signer acts on behalf of and is sent
    with every signed action. ``wallet_address`` overrides the key-derived
    address for read-only queries.
    """

    private_key: eth_keys.datatypes.PrivateKey
    vault_address: str | None = None
    wallet_address: str | None = None

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> "SigningIdentity":
        """Derive the identity once per batch from a credential bundle."""
        identity = cls(
            private_key=parse_private_key(credentials.private_key),
            vault_address=credentials.vault_address or None,
            wallet_address=credentials.wallet_address or None,
        )
        log.debug(
            "Signing as %s (vault=%s, wallet override=%s)",
            identity.signer_address,
            identity.vault_address,
            identity.wallet_address,
        )
        return identity

    def __repr__(self) -> str:
        return (
            f"SigningIdentity(signer_address={self.signer_address!r}, "
            f"vault_address={self.vault_address!r}, "
            f"wallet_address={self.wallet_address!r})"
        )

    @property
    def signer_address(self) -> str:
        """Checksummed address derived from the private key."""
        return self.private_key.public_key.to_checksum_address()

    @property
    def trading_address(self) -> str:
        """Effective address: vault, then wallet override, then key-derived."""
        return self.vault_address or self.wallet_address or self.signer_address
