"""
Registration controller - wires the flow state machine to the backend.

User actions map to methods. Problems are reported through the alert callback
the UI provides, and no request is sent when local validation fails.
"""
import logging
from typing import Callable, Optional

from ..exceptions import ValidationError
from ..users.models import UserRole
from . import flow
from .api import ApiError, MedAppClient, NetworkError
from .flow import FlowState, Screen
from .validation import SIGNUP_FIELDS, validate_role, validate_signup

# Set up logging
logger = logging.getLogger(__name__)

Alert = Callable[[str], None]


def log_alert(message: str) -> None:
    """Default alert: write the message to the log."""
    logger.warning(f"Alert: {message}")


class RegistrationController:
    """
    Drives one user through welcome, signup and role selection.

    Args:
        api: Client used to reach the backend
        alert: Called with every message meant for the user
    """

    def __init__(self, api: MedAppClient, alert: Optional[Alert] = None):
        self.api = api
        self.alert = alert or log_alert
        self.state = FlowState()

    @property
    def screen(self) -> Screen:
        return self.state.screen

    def press_login(self) -> None:
        self.state = flow.open_login(self.state)

    def press_signup(self) -> None:
        self.state = flow.open_signup(self.state)

    def go_back(self) -> None:
        self.state = flow.go_back(self.state)

    def update_field(self, name: str, value: str) -> None:
        self.state = flow.set_field(self.state, name, value)

    def submit_signup(self) -> bool:
        """
        Validate the signup form and send it.

        Returns:
            bool: True if the user was created and role selection is showing
        """
        if self.state.screen != Screen.SIGNUP:
            raise flow.TransitionError("submit the signup form", self.state.screen)

        form = {name: self.state.form.get(name, "") for name in SIGNUP_FIELDS}
        try:
            validate_signup(form)
        except ValidationError as e:
            self.alert(e.message)
            return False

        try:
            body = self.api.create_user(form)
        except (ApiError, NetworkError) as e:
            logger.error(f"Error saving data: {e.message}")
            self.alert(e.message)
            return False

        user = body.get("user") or {}
        user_id = user.get("id")
        if user_id is None:
            logger.error(f"Signup response did not include a user id: {body}")
            self.alert("Something went wrong! Please try again.")
            return False

        self.state = flow.signup_succeeded(self.state, user_id)
        self.alert(body.get("message") or "Your profile has been created!")
        return True

    def select_role(self, role: str) -> None:
        """Pick doctor or patient. Anything else alerts and leaves the choice unset."""
        if self.state.screen == Screen.ROLE_SELECTION and self.state.role_submitted:
            self.alert("Your role has already been submitted.")
            return
        try:
            chosen = UserRole(role)
        except ValueError:
            self.alert("Please select whether you are a doctor or a patient!")
            return
        self.state = flow.choose_role(self.state, chosen)

    def update_role_field(self, name: str, value: str) -> None:
        self.state = flow.set_role_field(self.state, name, value)

    def submit_role(self) -> bool:
        """
        Send the chosen role together with the id from the signup response.

        Returns:
            bool: True if the backend recorded the role
        """
        if self.state.screen != Screen.ROLE_SELECTION:
            raise flow.TransitionError("submit a role", self.state.screen)
        if self.state.role_submitted:
            self.alert("Your role has already been submitted.")
            return False

        try:
            role = validate_role(self.state.role)
        except ValidationError as e:
            self.alert(e.message)
            return False

        payload = {"user_id": self.state.user_id}
        payload.update({name: value for name, value in self.state.role_fields.items() if value})

        submit = self.api.create_doctor if role == UserRole.DOCTOR else self.api.create_patient
        try:
            body = submit(payload)
        except (ApiError, NetworkError) as e:
            logger.error(f"Error saving role {role.value} for user {self.state.user_id}: {e.message}")
            self.alert(e.message)
            return False

        self.state = flow.role_accepted(self.state)
        self.alert(body.get("message") or f"You are registered as a {role.value}!")
        return True
