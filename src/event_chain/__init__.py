"""
event_chain – Tamper-evident chains of signed events.

Import path convention::

    from event_chain.events import Event, EventChain, MergeConflict
    from event_chain.signer import LocalAccountSigner, RecoveringVerifier
    from event_chain.kernel.errors import ChainValidationError
    from event_chain.config import EventChainSettings, configure_logging
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
