"""
Registration client - the welcome/login/signup/role-selection flow and the
HTTP client it uses to reach the backend.
"""
from .api import ApiError, MedAppClient, NetworkError
from .controller import RegistrationController
from .flow import FlowState, Screen, TransitionError

__all__ = [
    "ApiError",
    "FlowState",
    "MedAppClient",
    "NetworkError",
    "RegistrationController",
    "Screen",
    "TransitionError",
]
