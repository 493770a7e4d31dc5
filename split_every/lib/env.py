"""Environment references in split config files.

A YAML split config may take its separator or count from the environment:

    split:
      mode: char
      pattern: "${FIELD_SEP:-,}"
      n: "${CHUNK_N}"

Only the braced ``${NAME}`` form is recognised, so a bare ``$`` inside a
separator is always literal. ``${NAME:-default}`` falls back to ``default``
when NAME is unset. Values typed on the command line are never expanded.

Uses python-dotenv to load ``.env`` files before a config is read.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from dotenv import load_dotenv

from split_every.lib.errors import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = ["ENV_REF_PATTERN", "expand_env_refs", "expand_config_values", "load_env_file"]

# ${NAME} or ${NAME:-default}
ENV_REF_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def load_env_file(path: Optional[Union[str, Path]] = None, *, override: bool = False) -> bool:
    """Load a .env file into os.environ.

    Args:
        path: Path to the .env file. None searches the working directory
              and its parents.
        override: Replace variables that are already set

    Returns:
        True if a file was found and at least one variable loaded
    """
    loaded = load_dotenv(dotenv_path=path, override=override)
    if loaded:
        logger.debug("Loaded environment from %s", path or ".env")
    return loaded


def expand_env_refs(
    value: str,
    *,
    field: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Replace ``${NAME}`` references in one config value.

    Example:
        >>> expand_env_refs("${FIELD_SEP:-|}", environ={})
        '|'

    Raises:
        ConfigurationError: If a referenced variable is unset and has no default
    """
    env = os.environ if environ is None else environ

    def resolve(match: re.Match[str]) -> str:
        name, default = match.group(1), match.group(2)
        if name in env:
            return env[name]
        if default is not None:
            return default
        raise ConfigurationError(
            f"Environment variable {name} is not set",
            field=field,
            value=value,
            suggestion=f"Export {name}, load it with --env-file, or write ${{{name}:-default}}.",
        )

    return ENV_REF_PATTERN.sub(resolve, value)


def expand_config_values(
    options: Mapping[str, Any],
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Expand references in the string values of a split config mapping.

    List values (sequence patterns) are expanded item by item; other values
    are passed through unchanged.
    """
    expanded: Dict[str, Any] = {}
    for key, value in options.items():
        if isinstance(value, str):
            expanded[key] = expand_env_refs(value, field=key, environ=environ)
        elif isinstance(value, list):
            expanded[key] = [
                expand_env_refs(item, field=key, environ=environ) if isinstance(item, str) else item
                for item in value
            ]
        else:
            expanded[key] = value
    return expanded
