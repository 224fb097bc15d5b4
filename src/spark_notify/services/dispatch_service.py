from __future__ import annotations

from collections.abc import Mapping

import requests

from spark_notify.app.config import get_settings
from spark_notify.infrastructure.data_models import Message, MessageFormat, Target, Token
from spark_notify.services.interpolation_service import interpolate
from spark_notify.services.requests_helpers import get_session


def send_message(
    target: Target,
    message: str,
    message_format: MessageFormat,
    token: Token,
    env: Mapping[str, str] | None,
    *,
    session: requests.Session | None = None,
) -> int:
    """
    Post one message to one space and return the HTTP status code.

    The response body is not read; deciding whether the status means success is
    left to the caller. Network failures (requests.ConnectionError, requests.Timeout)
    propagate.
    """
    settings = get_settings()
    if session is None:
        session = get_session()

    body = interpolate(message, env)
    payload = Message(target_id=target.id, body=body, format=message_format).to_payload()

    resp = session.post(
        settings.spark_api_url,
        json=payload,
        headers={"Authorization": f"Bearer {token.secret}"},
        timeout=settings.spark_request_timeout,
    )
    return resp.status_code
