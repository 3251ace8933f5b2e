"""
Registration flow state machine.

The flow moves welcome -> login or signup, signup -> role selection once the
backend accepts the signup, and any screen back to welcome. Role selection is
the last screen. Each transition returns a new FlowState; states are never
modified in place.
"""
import enum
from typing import Dict, Optional

from pydantic import BaseModel, Field

from ..exceptions import ValidationError
from ..users.models import UserRole
from .validation import ROLE_FIELDS, SIGNUP_FIELDS


class Screen(str, enum.Enum):
    """Screens of the registration flow."""
    WELCOME = "welcome"
    LOGIN = "login"
    SIGNUP = "signup"
    ROLE_SELECTION = "roleSelection"


class TransitionError(Exception):
    """Raised when an action is not allowed on the current screen."""

    def __init__(self, action: str, screen: Screen):
        super().__init__(f"Cannot {action} from the {screen.value} screen")
        self.action = action
        self.screen = screen


class FlowState(BaseModel):
    """
    Everything the registration screens need to render.

    Fields:
    - screen: Screen currently shown
    - form: Signup/login field values keyed by field name
    - user_id: ID returned by the signup response, sent with the role request
    - role: Role picked on the role selection screen
    - role_fields: Role-specific field values (specialty, date_of_birth, ...)
    - role_submitted: Whether the backend has accepted the role
    """
    screen: Screen = Screen.WELCOME
    form: Dict[str, str] = Field(default_factory=lambda: {name: "" for name in SIGNUP_FIELDS})
    user_id: Optional[int] = None
    role: Optional[UserRole] = None
    role_fields: Dict[str, str] = Field(default_factory=dict)
    role_submitted: bool = False

    class Config:
        frozen = True


def _require(state: FlowState, action: str, *screens: Screen) -> None:
    if state.screen not in screens:
        raise TransitionError(action, state.screen)


def open_login(state: FlowState) -> FlowState:
    _require(state, "open the login screen", Screen.WELCOME)
    return state.model_copy(update={"screen": Screen.LOGIN})


def open_signup(state: FlowState) -> FlowState:
    _require(state, "open the signup screen", Screen.WELCOME)
    return state.model_copy(update={"screen": Screen.SIGNUP})


def go_back(state: FlowState) -> FlowState:
    """Return to the welcome screen from anywhere, dropping what was entered."""
    return FlowState()


def set_field(state: FlowState, name: str, value: str) -> FlowState:
    """Store one form field, the way an input's change handler would."""
    _require(state, "edit the form", Screen.LOGIN, Screen.SIGNUP)
    if name not in SIGNUP_FIELDS:
        raise ValidationError(f"Unknown field: {name}", fields=[name])
    return state.model_copy(update={"form": {**state.form, name: value}})


def signup_succeeded(state: FlowState, user_id: int) -> FlowState:
    """Move to role selection once the backend has created the user."""
    _require(state, "complete signup", Screen.SIGNUP)
    return state.model_copy(update={"screen": Screen.ROLE_SELECTION, "user_id": user_id})


def choose_role(state: FlowState, role: UserRole) -> FlowState:
    _require(state, "choose a role", Screen.ROLE_SELECTION)
    if state.role_submitted:
        raise TransitionError("change the role after submitting it", state.screen)
    return state.model_copy(update={"role": UserRole(role), "role_fields": {}})


def set_role_field(state: FlowState, name: str, value: str) -> FlowState:
    _require(state, "edit role details", Screen.ROLE_SELECTION)
    if state.role is None:
        raise ValidationError("Please select whether you are a doctor or a patient!", fields=["role"])
    if name not in ROLE_FIELDS[state.role]:
        raise ValidationError(f"Unknown field for a {state.role.value}: {name}", fields=[name])
    return state.model_copy(update={"role_fields": {**state.role_fields, name: value}})


def role_accepted(state: FlowState) -> FlowState:
    _require(state, "complete role selection", Screen.ROLE_SELECTION)
    return state.model_copy(update={"role_submitted": True})
