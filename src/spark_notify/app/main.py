"""
Invocation routine shared by the three host hook points.

The build step, the post-build step and the pipeline step differ only in whether
the build result gates the notification and whether a failure aborts the step;
each is a thin adapter over `run_notification`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

import requests

from spark_notify.app.config import get_settings
from spark_notify.app.step_config import StepConfig
from spark_notify.errors import CredentialError, NotificationAborted, StepConfigError
from spark_notify.infrastructure.data_models import (
    BuildResult,
    DispatchOutcome,
    MessageFormat,
    NotificationReport,
    OutcomeKind,
    Token,
    is_message_valid,
)
from spark_notify.infrastructure.local_platform_manager import create_logger
from spark_notify.services.credential_service import (
    CredentialStore,
    build_credential_store,
    resolve_token,
)
from spark_notify.services.dispatch_service import send_message

logger = create_logger(logger_name="spark-notify", log_level="INFO")

HTTP_OK = 200
BUILD_RESULT_PLACEHOLDER = "${BUILD_RESULT}"

TRANSPORT_ERROR_MESSAGE = (
    "Could not send message because the spark server did not provide a response; "
    "this is likely intermittent"
)
UNEXPECTED_ERROR_MESSAGE = (
    "Could not send message because of an unknown issue; please file an issue"
)

# Result -> (StepConfig flag, reason logged when skipping)
RESULT_GATES: dict[BuildResult, tuple[str, str]] = {
    BuildResult.SUCCESS: ("skip_on_success", "job was successful"),
    BuildResult.FAILURE: ("skip_on_failure", "job failed"),
    BuildResult.ABORTED: ("skip_on_aborted", "job was aborted"),
    BuildResult.UNSTABLE: ("skip_on_unstable", "job is unstable"),
}

SendFunction = Callable[..., int]


def parse_build_result(value: BuildResult | str | None) -> BuildResult | None:
    """Parse a host build result. Unknown or blank values give None."""
    if value is None or isinstance(value, BuildResult):
        return value
    try:
        return BuildResult(value.strip().upper())
    except ValueError:
        return None


def _skip(reason: str, log: logging.Logger) -> NotificationReport:
    log.info(f"Skipping spark notifications because {reason}")
    return NotificationReport(skipped_reason=reason)


def _fail(error: str, fail_on_error: bool, log: logging.Logger) -> None:
    log.error(error)
    if fail_on_error:
        raise NotificationAborted(error)


def run_notification(
    step: StepConfig,
    env: Mapping[str, str] | None,
    *,
    build_result: BuildResult | None = None,
    gate_on_result: bool = False,
    fail_on_error: bool = False,
    log: logging.Logger | None = None,
    store: CredentialStore | None = None,
    send: SendFunction | None = None,
) -> NotificationReport:
    """
    Notify every configured space once.

    Args:
        step: The step configuration.
        env: Environment of the running build, or None to send the message as is.
        build_result: Terminal result of the build; only read when gate_on_result is set.
        gate_on_result: Substitute ${BUILD_RESULT} and apply the skip-on-result flags.
        fail_on_error: Abort on the first error instead of logging it and moving on.
        log: Where progress is written. Defaults to the package logger.
        store: Credential store. Defaults to the one named by the settings.
        send: Dispatcher. Defaults to `send_message`.

    Returns:
        NotificationReport: The skip reason, or one outcome per attempted space.

    Raises:
        NotificationAborted: Only when fail_on_error is set and something failed.
        StepConfigError: If the message type is unknown and the step was not skipped.
    """
    log = log or logger
    send = send or send_message

    if step.disable:
        log.info("Spark Notify Plugin Disabled!")
        return NotificationReport(skipped_reason="plugin is disabled")

    message = step.message
    if message is None or not is_message_valid(message):
        return _skip("no message was defined", log)

    if gate_on_result:
        if build_result is None:
            log.warning("Could not get result")
        else:
            message = message.replace(BUILD_RESULT_PLACEHOLDER, build_result.value)
            flag, reason = RESULT_GATES[build_result]
            if getattr(step, flag):
                return _skip(reason, log)

    try:
        message_format = MessageFormat.parse(step.message_type)
    except ValueError as e:
        log.error(str(e))
        raise StepConfigError(str(e)) from e

    if not step.targets:
        return _skip("no spaces were defined", log)

    report = NotificationReport()
    error: str | None = None

    try:
        if store is None:
            store = build_credential_store(get_settings())
        token: Token = resolve_token(store, step.credentials_id)
    except CredentialError as e:
        error, kind = str(e), OutcomeKind.CREDENTIAL_ERROR
    except Exception as e:
        log.debug(f"Credential lookup failed: {e!r}")
        error, kind = UNEXPECTED_ERROR_MESSAGE, OutcomeKind.UNEXPECTED_ERROR

    if error is not None:
        _fail(error, fail_on_error, log)
        report.outcomes.extend(
            DispatchOutcome(target_id=t.id, kind=kind, detail=error) for t in step.targets
        )
        return report

    for target in step.targets:
        log.info(f"Sending message to spark space: {target.id}")
        try:
            status_code = send(target, message, message_format, token, env)
        except (requests.ConnectionError, requests.Timeout) as e:
            log.debug(f"Transport failure for {target.id}: {e!r}")
            _fail(TRANSPORT_ERROR_MESSAGE, fail_on_error, log)
            outcome = DispatchOutcome(
                target_id=target.id,
                kind=OutcomeKind.TRANSPORT_ERROR,
                detail=TRANSPORT_ERROR_MESSAGE,
            )
        except Exception as e:
            log.debug(f"Unexpected failure for {target.id}: {e!r}")
            _fail(UNEXPECTED_ERROR_MESSAGE, fail_on_error, log)
            outcome = DispatchOutcome(
                target_id=target.id,
                kind=OutcomeKind.UNEXPECTED_ERROR,
                detail=UNEXPECTED_ERROR_MESSAGE,
            )
        else:
            if status_code == HTTP_OK:
                log.info("Message sent")
                outcome = DispatchOutcome(
                    target_id=target.id, kind=OutcomeKind.SENT, status_code=status_code
                )
            else:
                error = f"Could not send message; response code: {status_code}"
                _fail(error, fail_on_error, log)
                outcome = DispatchOutcome(
                    target_id=target.id,
                    kind=OutcomeKind.NON_SUCCESS_STATUS,
                    status_code=status_code,
                    detail=error,
                )
        report.outcomes.append(outcome)

    return report


""" Host hook points """


def perform_build_step(
    step: StepConfig, env: Mapping[str, str] | None, **kwargs: Any
) -> NotificationReport:
    """Build step: never fails the build."""
    return run_notification(step, env, **kwargs)


def perform_post_build(
    step: StepConfig,
    env: Mapping[str, str] | None,
    build_result: BuildResult | str | None,
    **kwargs: Any,
) -> NotificationReport:
    """Post-build step: gated on the build result, never fails the build."""
    return run_notification(
        step, env, build_result=parse_build_result(build_result), gate_on_result=True, **kwargs
    )


def run_pipeline_step(
    step: StepConfig, env: Mapping[str, str] | None, **kwargs: Any
) -> NotificationReport:
    """Pipeline step: raises NotificationAborted on the first error when failOnError is set."""
    return run_notification(step, env, fail_on_error=step.fail_on_error, **kwargs)


HOOKS = ("build_step", "post_build", "pipeline_step")


def run_hook(
    hook: str,
    step: StepConfig,
    env: Mapping[str, str] | None,
    build_result: BuildResult | str | None = None,
    **kwargs: Any,
) -> NotificationReport:
    """Dispatch to the adapter for a hook name."""
    if hook == "build_step":
        return perform_build_step(step, env, **kwargs)
    if hook == "post_build":
        return perform_post_build(step, env, build_result, **kwargs)
    if hook == "pipeline_step":
        return run_pipeline_step(step, env, **kwargs)
    raise ValueError(f"Unknown hook: {hook!r}")
