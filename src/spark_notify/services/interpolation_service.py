from __future__ import annotations

import re
from collections.abc import Mapping

# ${env.NAME}, as written in pipeline scripts
ENV_PATTERN_WORKFLOW = re.compile(r"\$\{env\.(.+?)\}")
# $NAME and ${NAME}, the build platform's own expansion syntax; $$ is a literal $
ENV_PATTERN_MACRO = re.compile(r"\$([A-Za-z0-9_]+)|\$\{([A-Za-z0-9_.]+)\}|\$\$")


def expand(message: str, env: Mapping[str, str]) -> str:
    """
    Expand $NAME and ${NAME} placeholders whose name is in env.

    Placeholders that do not match a key are left as they are. $$ becomes $.
    """

    def _replace(match: re.Match[str]) -> str:
        if match.group(0) == "$$":
            return "$"
        name = match.group(1) or match.group(2)
        value = env.get(name)
        return match.group(0) if value is None else value

    return ENV_PATTERN_MACRO.sub(_replace, message)


def interpolate(message: str, env: Mapping[str, str] | None) -> str:
    """
    Substitute environment variables into a message.

    First every ${env.NAME} is replaced by env[NAME], or by an empty string when NAME
    is not set. The result then goes through the regular $NAME / ${NAME} expansion.
    With no environment the message is returned unchanged.
    """
    if env is None:
        return message

    for name in dict.fromkeys(ENV_PATTERN_WORKFLOW.findall(message)):
        message = message.replace("${env." + name + "}", env.get(name, ""))

    return expand(message, env)
