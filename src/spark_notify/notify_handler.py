import json
from typing import Any

from spark_notify.app.main import HOOKS, logger, run_hook
from spark_notify.app.step_config import load_step_config
from spark_notify.errors import NotificationAborted, StepConfigError


def create_response(
    status_code: int, body: str, content_type: str = "application/json"
) -> dict[str, Any]:
    """
    Create a standard HTTP response.
    """
    return {
        "statusCode": status_code,
        "body": body,
        "headers": {"Content-Type": content_type},
        "isBase64Encoded": False,
    }


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Entry point for a host hook.

    The event names the hook (build_step, post_build or pipeline_step) and carries the
    step configuration, the build environment and, for post_build, the build result.
    """
    hook = event.get("hook")
    if hook not in HOOKS:
        logger.error(f"Unknown hook: {hook!r}")
        return create_response(400, json.dumps({"error": f"Unknown hook: {hook!r}"}))

    env = event.get("env")
    if env is not None and not isinstance(env, dict):
        logger.error("Event env must be a mapping")
        return create_response(400, json.dumps({"error": "Event env must be a mapping"}))

    try:
        step = load_step_config(event.get("config") or {})
    except StepConfigError as e:
        logger.error(f"Invalid step configuration: {e}")
        return create_response(400, json.dumps({"error": f"Invalid step configuration: {e}"}))

    try:
        report = run_hook(hook, step, env, event.get("build_result"))
    except StepConfigError as e:
        return create_response(400, json.dumps({"error": f"Invalid step configuration: {e}"}))
    except NotificationAborted as e:
        return create_response(500, json.dumps({"error": str(e)}))

    return create_response(200, json.dumps(report.to_dict()))
