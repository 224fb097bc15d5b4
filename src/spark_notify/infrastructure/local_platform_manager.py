import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path


def create_logger(
    log_level: str = "INFO",
    logger_name: str = "spark-notify",
    logs_dir: str | Path | None = None,
) -> logging.Logger:
    """
    Create a logger that outputs to console and optionally to a file.

    Args:
        log_level (str): Logging level (e.g., "INFO", "DEBUG").
        logger_name (str): Name for the logger instance.
        logs_dir (str | Path | None): Directory for log files. If None, only console
            logging is configured.

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    if not logger.handlers:  # Prevent handler duplication
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if logs_dir is not None:
            logs_dir = Path(logs_dir)
            try:
                logs_dir.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(logs_dir / f"{logger_name}.log")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"File logging disabled: {e}")

    return logger


def env_var_name(name: str) -> str:
    """
    Convert a parameter or credential name to the environment variable that holds it.

    spark-bot.token -> SPARK_BOT_TOKEN
    """
    return re.sub(r"[^A-Za-z0-9]+", "_", name.strip()).strip("_").upper()


def get_parameters(
    param_names: list[str] | str,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str | None]:
    """
    Read parameters from environment variables.

    Parameters are stored in the environment in uppercase, but the result dictionary is
    keyed by the lowercase names that were requested. Missing parameters map to None.

    Args:
        param_names: A parameter name or list of parameter names.
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        dict[str, str | None]: Requested name -> value.
    """
    if isinstance(param_names, str):
        param_names = [param_names]
    if environ is None:
        environ = os.environ

    result: dict[str, str | None] = {}
    for param_name in param_names:
        result[param_name.lower()] = environ.get(env_var_name(param_name))
    return result
