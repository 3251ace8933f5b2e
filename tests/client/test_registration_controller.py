"""
Tests for the registration controller, against a mocked transport and against
the real application.
"""
import json

import httpx
import pytest

from medapp.client import MedAppClient, RegistrationController, Screen, TransitionError
from medapp.doctors.service import get_doctor_by_user, get_doctor_list
from medapp.users.service import get_user


class Recorder:
    """Mock backend that records every request it receives."""

    def __init__(self, responses=None):
        self.requests = []
        self.responses = responses or {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.responses.get(
            request.url.path, (201, {"message": "ok", "user": {"id": 11}})
        )
        return httpx.Response(status_code, json=body)

    def bodies(self, path):
        return [json.loads(r.content) for r in self.requests if r.url.path == path]


def make_controller(handler):
    alerts = []
    http_client = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(handler))
    controller = RegistrationController(MedAppClient(http_client=http_client), alert=alerts.append)
    return controller, alerts


def fill_signup(controller, form):
    controller.press_signup()
    for name, value in form.items():
        controller.update_field(name, value)


@pytest.mark.parametrize(
    "form",
    [
        {"first_name": "", "last_name": "Lee", "email": "ana@x.com", "password": "p1"},
        {"first_name": "Ana", "last_name": "Lee", "email": "ana@x.com", "password": ""},
        {"first_name": "Ana", "last_name": "Lee", "email": "ana.x.com", "password": "p1"},
    ],
)
def test_invalid_signup_sends_nothing(form):
    backend = Recorder()
    controller, alerts = make_controller(backend)
    fill_signup(controller, form)

    assert controller.submit_signup() is False

    assert backend.requests == []
    assert len(alerts) == 1
    assert controller.screen == Screen.SIGNUP


def test_valid_signup_posts_once_and_moves_to_role_selection(ana):
    backend = Recorder()
    controller, alerts = make_controller(backend)
    fill_signup(controller, ana)

    assert controller.submit_signup() is True

    assert backend.bodies("/api/users") == [ana]
    assert len(backend.requests) == 1
    assert controller.screen == Screen.ROLE_SELECTION
    assert controller.state.user_id == 11
    assert alerts == ["ok"]


def test_failed_signup_shows_server_message_and_stays(ana):
    backend = Recorder({"/api/users": (409, {"message": "Email ana@x.com is already registered"})})
    controller, alerts = make_controller(backend)
    fill_signup(controller, ana)

    assert controller.submit_signup() is False

    assert alerts == ["Email ana@x.com is already registered"]
    assert controller.screen == Screen.SIGNUP


def test_network_failure_is_reported(ana):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    controller, alerts = make_controller(refuse)
    fill_signup(controller, ana)

    assert controller.submit_signup() is False
    assert alerts == ["Something went wrong! Please try again."]
    assert controller.screen == Screen.SIGNUP


def test_signup_cannot_be_submitted_from_welcome():
    controller, _ = make_controller(Recorder())
    with pytest.raises(TransitionError):
        controller.submit_signup()


def test_role_submission_without_role_alerts(ana):
    backend = Recorder()
    controller, alerts = make_controller(backend)
    fill_signup(controller, ana)
    controller.submit_signup()
    alerts.clear()

    assert controller.submit_role() is False

    assert alerts == ["Please select whether you are a doctor or a patient!"]
    assert [r.url.path for r in backend.requests] == ["/api/users"]


def test_unknown_role_is_not_selected(ana):
    controller, alerts = make_controller(Recorder())
    fill_signup(controller, ana)
    controller.submit_signup()
    alerts.clear()

    controller.select_role("nurse")

    assert controller.state.role is None
    assert alerts == ["Please select whether you are a doctor or a patient!"]


def test_role_is_sent_once_with_signup_user_id(ana):
    backend = Recorder({"/api/patients": (201, {"message": "You are registered as a patient!"})})
    controller, alerts = make_controller(backend)
    fill_signup(controller, ana)
    controller.submit_signup()
    controller.select_role("patient")
    controller.update_role_field("insurance_provider", "Acme Health")
    controller.update_role_field("date_of_birth", "")

    assert controller.submit_role() is True
    assert controller.submit_role() is False

    assert backend.bodies("/api/patients") == [{"user_id": 11, "insurance_provider": "Acme Health"}]
    assert alerts[-2:] == ["You are registered as a patient!", "Your role has already been submitted."]


def test_go_back_returns_to_welcome(ana):
    controller, _ = make_controller(Recorder())
    fill_signup(controller, ana)
    controller.go_back()
    assert controller.screen == Screen.WELCOME
    assert controller.state.form["email"] == ""


def test_full_flow_against_the_application(client, db, ana):
    alerts = []
    controller = RegistrationController(MedAppClient(http_client=client), alert=alerts.append)

    fill_signup(controller, ana)
    assert controller.submit_signup() is True
    user_id = controller.state.user_id
    assert get_user(db, user_id)["password"] != ana["password"]
    assert get_doctor_by_user(db, user_id) is None

    controller.select_role("doctor")
    controller.update_role_field("specialty", "Cardiology")
    assert controller.submit_role() is True

    doctors = get_doctor_list(db)
    assert len(doctors) == 1
    assert doctors[0]["user_id"] == user_id
    assert doctors[0]["specialty"] == "Cardiology"
    assert alerts == ["Your profile has been created!", "You are registered as a doctor!"]


def test_duplicate_signup_against_the_application(client, ana):
    client.post("/api/users", json=ana)
    alerts = []
    controller = RegistrationController(MedAppClient(http_client=client), alert=alerts.append)

    fill_signup(controller, ana)

    assert controller.submit_signup() is False
    assert alerts == ["Email ana@x.com is already registered"]


def test_server_email_rejection_names_the_field(client, db, ana):
    """
    The server checks emails more strictly than the client pattern; the user
    still learns which field was wrong.
    """
    alerts = []
    controller = RegistrationController(MedAppClient(http_client=client), alert=alerts.append)
    fill_signup(controller, {**ana, "email": "a b@x.com"})

    assert controller.submit_signup() is False

    assert len(alerts) == 1
    assert alerts[0].startswith("Invalid email: ")
    assert controller.screen == Screen.SIGNUP
    assert get_user(db, 1) is None


def test_role_cannot_be_changed_after_it_was_accepted(ana):
    backend = Recorder()
    controller, alerts = make_controller(backend)
    fill_signup(controller, ana)
    controller.submit_signup()
    controller.select_role("doctor")
    assert controller.submit_role() is True

    controller.select_role("patient")

    assert controller.state.role.value == "doctor"
    assert alerts[-1] == "Your role has already been submitted."
    assert backend.bodies("/api/patients") == []


def test_rejected_role_shows_server_message_and_can_be_retried(ana):
    backend = Recorder({"/api/doctors": (404, {"message": "User 11 does not exist"})})
    controller, alerts = make_controller(backend)
    fill_signup(controller, ana)
    controller.submit_signup()
    controller.select_role("doctor")

    assert controller.submit_role() is False
    assert alerts[-1] == "User 11 does not exist"
    assert controller.state.role_submitted is False

    backend.responses["/api/doctors"] = (201, {"message": "You are registered as a doctor!"})
    assert controller.submit_role() is True
    assert controller.state.role_submitted is True
    assert backend.bodies("/api/doctors") == [{"user_id": 11}, {"user_id": 11}]


def test_role_network_failure_is_reported_and_can_be_retried(ana):
    backend = Recorder()
    down = {"value": True}

    def flaky(request):
        if down["value"] and request.url.path == "/api/patients":
            raise httpx.ConnectError("connection refused", request=request)
        return backend(request)

    controller, alerts = make_controller(flaky)
    fill_signup(controller, ana)
    controller.submit_signup()
    controller.select_role("patient")

    assert controller.submit_role() is False
    assert alerts[-1] == "Something went wrong! Please try again."
    assert controller.state.role_submitted is False

    down["value"] = False
    assert controller.submit_role() is True
    assert backend.bodies("/api/patients") == [{"user_id": 11}]
