"""Tests for the host event handler."""

import json

import pytest

from conftest import RecordingSend
from spark_notify.notify_handler import lambda_handler


@pytest.fixture
def send(monkeypatch):
    send = RecordingSend()
    monkeypatch.setattr("spark_notify.app.main.send_message", send)
    monkeypatch.setenv("SPARK_BOT_TOKEN", "tok")
    return send


def make_event(**overrides):
    event = {
        "hook": "post_build",
        "config": {
            "message": "${env.JOB_NAME}: ${BUILD_RESULT}",
            "spaceList": [{"spaceName": "CI", "spaceId": "space-1"}],
            "credentialsId": "spark-bot-token",
        },
        "env": {"JOB_NAME": "deploy"},
        "build_result": "FAILURE",
    }
    event.update(overrides)
    return event


class TestLambdaHandler:
    def test_post_build(self, send):
        response = lambda_handler(make_event(), None)
        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body["outcomes"][0]["kind"] == "sent"
        assert send.calls[0]["message"] == "${env.JOB_NAME}: FAILURE"
        assert send.calls[0]["env"] == {"JOB_NAME": "deploy"}
        assert send.calls[0]["token"].secret == "tok"

    def test_skip_reported(self, send):
        event = make_event(build_result="SUCCESS")
        event["config"]["skipOnSuccess"] = True
        body = json.loads(lambda_handler(event, None)["body"])
        assert body["skipped"] is True
        assert send.calls == []

    def test_unknown_hook(self, send):
        assert lambda_handler(make_event(hook="checkout"), None)["statusCode"] == 400

    def test_bad_env(self, send):
        assert lambda_handler(make_event(env=["A=1"]), None)["statusCode"] == 400

    def test_bad_config(self, send):
        event = make_event()
        event["config"]["messageType"] = "rtf"
        response = lambda_handler(event, None)
        assert response["statusCode"] == 400
        assert "Unknown message type" in response["body"]

    def test_disabled_step_with_unknown_type_skips(self, send):
        event = make_event(hook="build_step")
        event["config"].update({"disable": True, "messageType": "rtf"})
        response = lambda_handler(event, None)
        assert response["statusCode"] == 200
        assert json.loads(response["body"])["skipped"] is True
        assert send.calls == []

    def test_non_string_message_type(self, send):
        event = make_event()
        event["config"]["messageType"] = 1
        response = lambda_handler(event, None)
        assert response["statusCode"] == 400
        assert "messageType" in response["body"]

    def test_non_string_message(self, send):
        event = make_event()
        event["config"]["message"] = 5
        assert lambda_handler(event, None)["statusCode"] == 400
        assert send.calls == []

    def test_pipeline_abort(self, send):
        send.results = [403]
        event = make_event(hook="pipeline_step")
        event["config"]["failOnError"] = True
        response = lambda_handler(event, None)
        assert response["statusCode"] == 500
        assert "403" in json.loads(response["body"])["error"]

    def test_build_step_failure_is_not_fatal(self, send):
        send.results = [403]
        response = lambda_handler(make_event(hook="build_step"), None)
        assert response["statusCode"] == 200
        assert json.loads(response["body"])["outcomes"][0]["status_code"] == 403
