"""Canonical serialization, hashing and signing of exchange actions.

The signed message is the compact JSON of ``{action, nonce, vaultAddress}``
(``vaultAddress`` omitted when unset). Its keccak256 digest is signed as a
generic personal message (EIP-191), not as EIP-712 typed data, and the
result is returned in the exchange's ``{r, s, v}`` shape.

The request body sent to ``/exchange`` is rebuilt from the exact bytes that
were signed, never from the caller's objects, so the two cannot drift.
"""

import logging
from dataclasses import dataclass

import orjson
from eth_utils import keccak

from hyperliquid_hip3.errors import BaseError, SigningError
from hyperliquid_hip3.helpers import serialize_request
from hyperliquid_hip3.keys import SigningIdentity
from hyperliquid_hip3.types import Action, JsonObject, Nonce, Signature

log = logging.getLogger(__name__)

PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n"
# eth_keys recovery ids are 0/1, wallets publish 27/28
RECOVERY_ID_OFFSET = 27


def signing_envelope(
    action: Action | JsonObject, nonce: Nonce, vault_address: str | None
) -> JsonObject:
    """The object whose serialization is signed."""
    action_data = action if isinstance(action, dict) else action.to_dict()
    envelope: JsonObject = {"action": action_data, "nonce": nonce}
    if vault_address:
        envelope["vaultAddress"] = vault_address
    return envelope


def canonical_payload(
    action: Action | JsonObject, nonce: Nonce, vault_address: str | None
) -> bytes:
    """Compact, insertion-ordered UTF-8 JSON of the signing envelope."""
    return serialize_request(signing_envelope(action, nonce, vault_address))


def action_hash(payload: bytes) -> bytes:
    """keccak256 of the canonical payload."""
    try:
        return keccak(primitive=payload)
    except Exception as e:
        raise SigningError(f"Failed to hash action payload: {e}") from e


def personal_message_hash(message: bytes) -> bytes:
    """EIP-191 digest a wallet computes when asked to sign ``message``."""
    return keccak(
        primitive=PERSONAL_MESSAGE_PREFIX + str(len(message)).encode() + message
    )


def sign_payload(payload: bytes, identity: SigningIdentity) -> Signature:
    """Hash a canonical payload and sign the hash with the identity's key.

    Raises:
        SigningError: If hashing or signing fails

    """
    digest = action_hash(payload)
    try:
        signed_message = identity.private_key.sign_msg_hash(
            personal_message_hash(digest)
        )
    except Exception as e:
        raise SigningError(f"Failed to sign action: {type(e).__name__}") from e

    return Signature.from_components(
        signed_message.r, signed_message.s, signed_message.v + RECOVERY_ID_OFFSET
    )


def sign(
    action: Action | JsonObject,
    nonce: Nonce,
    vault_address: str | None,
    identity: SigningIdentity,
) -> Signature:
    """Sign an action for the given nonce and vault.

    Deterministic: the same inputs always produce the same ``(r, s, v)``.

    Raises:
        SigningError: If the action cannot be hashed or signed

    """
    return _sign_action(action, nonce, vault_address, identity).signature


@dataclass(frozen=True)
class SignedEnvelope:
    """Signed bytes plus their signature, ready for ``/exchange``."""

    payload: bytes
    signature: Signature

    def to_dict(self) -> JsonObject:
        """Request body ``{action, nonce, signature, vaultAddress?}``.

        ``action``, ``nonce`` and ``vaultAddress`` are decoded from the
        signed payload.
        """
        signed = orjson.loads(self.payload)
        body: JsonObject = {
            "action": signed["action"],
            "nonce": signed["nonce"],
            "signature": self.signature.to_dict(),
        }
        if "vaultAddress" in signed:
            body["vaultAddress"] = signed["vaultAddress"]
        return body

    @property
    def nonce(self) -> Nonce:
        """Nonce that was signed."""
        return orjson.loads(self.payload)["nonce"]


def sign_envelope(
    action: Action | JsonObject, nonce: Nonce, identity: SigningIdentity
) -> SignedEnvelope:
    """Serialize, hash and sign an action on behalf of the identity's vault.

    Raises:
        SigningError: If the action cannot be hashed or signed

    """
    envelope = _sign_action(action, nonce, identity.vault_address, identity)
    log.debug("Signed action with nonce %d", nonce)
    return envelope


def _sign_action(
    action: Action | JsonObject,
    nonce: Nonce,
    vault_address: str | None,
    identity: SigningIdentity,
) -> SignedEnvelope:
    try:
        payload = canonical_payload(action, nonce, vault_address)
    except BaseError as e:
        raise SigningError(f"Failed to serialize action: {e}") from e
    return SignedEnvelope(payload=payload, signature=sign_payload(payload, identity))
