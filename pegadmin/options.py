"""Process-wide client settings."""

from __future__ import annotations

_DEFAULT_RPC_TIMEOUT = 10.0

_rpc_timeout = _DEFAULT_RPC_TIMEOUT


def rpc_timeout() -> float:
    """The timeout, in seconds, applied to every RPC."""
    return _rpc_timeout


def set_rpc_timeout(seconds: float) -> None:
    """Change the global RPC timeout."""
    global _rpc_timeout
    _rpc_timeout = float(seconds)