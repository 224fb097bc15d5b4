#!/usr/bin/env python3
"""
Send a build notification to Webex (Spark) spaces from the command line.

Examples:
  export SPARK_BOT_TOKEN="..."
  spark-notify post-build --config notify.json --result FAILURE
  spark-notify pipeline-step --config notify.json

The config file holds the step configuration as the build host saves it, e.g.
  {"message": "Build ${BUILD_NUMBER}: ${BUILD_RESULT}", "messageType": "markdown",
   "spaceList": [{"spaceName": "CI", "spaceId": "Y2lzY29..."}],
   "credentialsId": "spark-bot-token", "skipOnSuccess": true}
"""

from __future__ import annotations

import argparse
import json
import os
import sys

from spark_notify.app.config import get_settings
from spark_notify.app.main import run_hook
from spark_notify.app.step_config import load_step_config
from spark_notify.errors import NotificationAborted, StepConfigError
from spark_notify.infrastructure.data_models import BuildResult
from spark_notify.infrastructure.local_platform_manager import create_logger

COMMANDS = {
    "build-step": "build_step",
    "post-build": "post_build",
    "pipeline-step": "pipeline_step",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spark-notify",
        description="Post a build notification to Webex (Spark) spaces.",
    )
    parser.add_argument("command", choices=sorted(COMMANDS), help="Host hook to run as")
    parser.add_argument(
        "--config", required=True, help="JSON file with the step configuration"
    )
    parser.add_argument(
        "--result",
        type=str.upper,
        choices=[r.value for r in BuildResult],
        help="Build result (post-build only)",
    )
    parser.add_argument(
        "--no-env",
        action="store_true",
        help="Send the message without substituting environment variables",
    )
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValueError as e:
        create_logger(logger_name="spark-notify").error(str(e))
        return 2

    logger = create_logger(
        log_level=args.log_level or settings.log_level, logger_name="spark-notify"
    )

    try:
        with open(args.config) as f:
            data = json.load(f)
        step = load_step_config(data)
    except (OSError, json.JSONDecodeError, StepConfigError) as e:
        logger.error(f"Could not load step configuration from {args.config}: {e}")
        return 2

    env = None if args.no_env else dict(os.environ)

    try:
        report = run_hook(COMMANDS[args.command], step, env, args.result, log=logger)
    except StepConfigError as e:
        logger.error(f"Invalid step configuration in {args.config}: {e}")
        return 2
    except NotificationAborted as e:
        logger.error(f"Notification step failed: {e}")
        return 1

    sent = sum(1 for o in report.outcomes if o.ok)
    logger.info(f"Done: {sent}/{len(report.outcomes)} spaces notified")
    return 0


if __name__ == "__main__":
    sys.exit(main())
