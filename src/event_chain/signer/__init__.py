"""Signer – capability ports and eth-account backed implementations."""
from event_chain.signer.local import LocalAccountSigner
from event_chain.signer.ports import Signer, VerifyFn
from event_chain.signer.typed_data import encode_sign_data, normalize_typed_value
from event_chain.signer.verify import (
    AsyncVerifier,
    RecoveringVerifier,
    recover_typed_data_signer,
    verify_typed_data,
)
from event_chain.signer.wallet_client import WalletClient, WalletClientSigner

__all__ = [
    "AsyncVerifier",
    "LocalAccountSigner",
    "RecoveringVerifier",
    "Signer",
    "VerifyFn",
    "WalletClient",
    "WalletClientSigner",
    "encode_sign_data",
    "normalize_typed_value",
    "recover_typed_data_signer",
    "verify_typed_data",
]
