"""Per-connection session state, handshake and liveness supervision."""

from .state import HandshakeState, SessionField, SessionState, StateWrite

__all__ = ["HandshakeState", "SessionField", "SessionState", "StateWrite"]
