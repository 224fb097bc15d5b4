#!/usr/bin/env python3
# aws_platform_manager.py
"""
Helper functions for operations on the AWS platform.
"""

from __future__ import annotations

from typing import Any

import boto3
from botocore.exceptions import ClientError

""" AWS Parameter Store """


def create_ssm_client(region_name: str = "us-east-1") -> Any:
    return boto3.client("ssm", region_name=region_name)


def parameter_path(base_path: str, name: str) -> str:
    """Join a base path and a leaf name with exactly one slash."""
    return base_path.rstrip("/") + "/" + name.strip("/")


def get_parameter_record(ssm: Any, name: str, *, decrypt: bool = True) -> dict[str, Any] | None:
    """
    Fetch a single parameter by its full name.

    Returns the raw `Parameter` record (Name, Type, Value, ...) or None when the
    parameter does not exist. Any other client error propagates.
    """
    try:
        resp = ssm.get_parameter(Name=name, WithDecryption=decrypt)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "ParameterNotFound":
            return None
        raise

    record: dict[str, Any] = resp["Parameter"]
    return record
