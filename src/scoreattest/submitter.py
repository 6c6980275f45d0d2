"""scoreattest.submitter — Signs and broadcasts score attestations.

Wraps one encoded payload in an attestation request, submits it through the
attester contract's ``submitAttestations`` function and waits for the
receipt. There is no idempotency key on-chain: submitting the same address
twice creates two attestations.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from eth_account import Account
from web3 import Web3

from .errors import SubmissionFailed

logger = logging.getLogger(__name__)

ZERO_BYTES32 = b"\x00" * 32

ATTESTER_ABI = [
    {
        "inputs": [
            {
                "components": [
                    {"internalType": "bytes32", "name": "schema", "type": "bytes32"},
                    {
                        "components": [
                            {"internalType": "address", "name": "recipient", "type": "address"},
                            {"internalType": "uint64", "name": "expirationTime", "type": "uint64"},
                            {"internalType": "bool", "name": "revocable", "type": "bool"},
                            {"internalType": "bytes32", "name": "refUID", "type": "bytes32"},
                            {"internalType": "bytes", "name": "data", "type": "bytes"},
                            {"internalType": "uint256", "name": "value", "type": "uint256"},
                        ],
                        "internalType": "struct AttestationRequestData[]",
                        "name": "data",
                        "type": "tuple[]",
                    },
                ],
                "internalType": "struct MultiAttestationRequest[]",
                "name": "multiAttestationRequest",
                "type": "tuple[]",
            }
        ],
        "name": "submitAttestations",
        "outputs": [{"internalType": "bytes32[]", "name": "", "type": "bytes32[]"}],
        "stateMutability": "payable",
        "type": "function",
    }
]


def expiration_seconds(instant: datetime) -> int:
    """Unix seconds for ``instant``, sub-second part dropped. Naive is UTC."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return calendar.timegm(instant.utctimetuple())


@dataclass(frozen=True)
class AttestationRequest:
    """Ledger-side request data for one recipient."""
    recipient: str
    expiration_time: int
    data: bytes
    revocable: bool = True
    ref_uid: bytes = ZERO_BYTES32
    value: int = 0

    def as_tuple(self) -> tuple:
        return (
            self.recipient,
            self.expiration_time,
            self.revocable,
            self.ref_uid,
            self.data,
            self.value,
        )


def _schema_bytes(schema_id: str | bytes) -> bytes:
    raw = schema_id if isinstance(schema_id, bytes) else Web3.to_bytes(hexstr=schema_id)
    if len(raw) != 32:
        raise ValueError(f"schema id must be 32 bytes, got {len(raw)}")
    return raw


def _error_message(e: Exception) -> str:
    """Pull the node's message out of an RPC error where there is one."""
    if e.args and isinstance(e.args[0], dict) and e.args[0].get("message"):
        return str(e.args[0]["message"])
    rpc = getattr(e, "rpc_response", None)
    if isinstance(rpc, dict) and isinstance(rpc.get("error"), dict):
        msg = rpc["error"].get("message")
        if msg:
            return str(msg)
    return str(e) or type(e).__name__


class AttestationSubmitter:
    """Submits one attestation per call with a single signing account."""

    def __init__(self, w3: Web3, account: Any, attester_address: str, *,
                 receipt_timeout: float = 120.0):
        self.w3 = w3
        self.account = account
        self.attester_address = Web3.to_checksum_address(attester_address)
        self.receipt_timeout = receipt_timeout
        self.contract = w3.eth.contract(address=self.attester_address, abi=ATTESTER_ABI)
        self._chain_id: int | None = None

    @classmethod
    def from_config(cls, config) -> "AttestationSubmitter":
        w3 = Web3(Web3.HTTPProvider(config.rpc_url))
        account = Account.from_key(config.private_key)
        return cls(w3, account, config.attester_address)

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.w3.eth.chain_id
        return self._chain_id

    def build_request(self, address: str, payload: bytes, expiration: datetime) -> AttestationRequest:
        return AttestationRequest(
            recipient=Web3.to_checksum_address(address),
            expiration_time=expiration_seconds(expiration),
            data=payload,
        )

    def submit(self, address: str, payload: bytes, expiration: datetime,
               schema_id: str | bytes) -> str:
        """Attest ``payload`` for ``address`` and wait for inclusion.

        Returns the 0x-prefixed transaction hash.

        Raises:
            SubmissionFailed: on any signing, broadcast or confirmation
                error, or when the transaction reverted.
        """
        tx_hash = None
        try:
            request = self.build_request(address, payload, expiration)
            multi_request = [(_schema_bytes(schema_id), [request.as_tuple()])]

            tx = self.contract.functions.submitAttestations(multi_request).build_transaction({
                "from": self.account.address,
                "nonce": self.w3.eth.get_transaction_count(self.account.address, "pending"),
                "chainId": self.chain_id,
            })
            signed = self.account.sign_transaction(tx)
            tx_hash = Web3.to_hex(self.w3.eth.send_raw_transaction(signed.raw_transaction))
            logger.info("Broadcast attestation for %s (tx: %s)", address, tx_hash)

            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except Exception as e:
            raise SubmissionFailed(address, _error_message(e), tx_hash=tx_hash) from e

        if receipt["status"] != 1:
            raise SubmissionFailed(address, "transaction reverted", tx_hash=tx_hash)
        return tx_hash
