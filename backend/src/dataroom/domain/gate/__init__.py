"""Gate domain module - shared-credential access gate"""

from .access_gate import AccessGate, GateCredentials, GateState

__all__ = ["AccessGate", "GateCredentials", "GateState"]
