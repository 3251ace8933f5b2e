"""
Tests for the registration screen transitions.
"""
import pytest

from medapp.client import flow
from medapp.client.flow import FlowState, Screen, TransitionError
from medapp.exceptions import ValidationError
from medapp.users.models import UserRole


def test_starts_on_welcome_with_empty_form():
    state = FlowState()
    assert state.screen == Screen.WELCOME
    assert state.form == {"first_name": "", "last_name": "", "email": "", "password": ""}
    assert state.user_id is None


def test_welcome_opens_login_or_signup():
    assert flow.open_login(FlowState()).screen == Screen.LOGIN
    assert flow.open_signup(FlowState()).screen == Screen.SIGNUP


def test_login_and_signup_only_open_from_welcome():
    signup = flow.open_signup(FlowState())
    with pytest.raises(TransitionError):
        flow.open_login(signup)
    with pytest.raises(TransitionError):
        flow.open_signup(signup)


def test_transitions_do_not_modify_the_original_state():
    welcome = FlowState()
    signup = flow.open_signup(welcome)
    edited = flow.set_field(signup, "first_name", "Ana")

    assert welcome.screen == Screen.WELCOME
    assert signup.form["first_name"] == ""
    assert edited.form["first_name"] == "Ana"


def test_go_back_from_any_screen_clears_everything():
    state = flow.set_field(flow.open_signup(FlowState()), "email", "ana@x.com")
    state = flow.signup_succeeded(state, 3)

    back = flow.go_back(state)

    assert back == FlowState()


def test_role_selection_is_reached_only_from_signup():
    with pytest.raises(TransitionError):
        flow.signup_succeeded(FlowState(), 1)
    with pytest.raises(TransitionError):
        flow.signup_succeeded(flow.open_login(FlowState()), 1)

    state = flow.signup_succeeded(flow.open_signup(FlowState()), 7)
    assert state.screen == Screen.ROLE_SELECTION
    assert state.user_id == 7


def test_unknown_form_field_is_rejected():
    with pytest.raises(ValidationError):
        flow.set_field(flow.open_signup(FlowState()), "username", "ana")


def test_role_fields_follow_the_chosen_role():
    state = flow.signup_succeeded(flow.open_signup(FlowState()), 1)

    with pytest.raises(ValidationError):
        flow.set_role_field(state, "specialty", "Cardiology")

    doctor = flow.set_role_field(flow.choose_role(state, UserRole.DOCTOR), "specialty", "Cardiology")
    assert doctor.role_fields == {"specialty": "Cardiology"}
    with pytest.raises(ValidationError):
        flow.set_role_field(doctor, "insurance_provider", "Acme Health")

    patient = flow.choose_role(doctor, UserRole.PATIENT)
    assert patient.role == UserRole.PATIENT
    assert patient.role_fields == {}


def test_role_cannot_change_after_submission():
    state = flow.choose_role(flow.signup_succeeded(flow.open_signup(FlowState()), 1), UserRole.DOCTOR)
    state = flow.role_accepted(state)

    with pytest.raises(TransitionError):
        flow.choose_role(state, UserRole.PATIENT)
