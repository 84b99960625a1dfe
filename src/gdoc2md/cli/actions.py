"""Custom argparse Action classes for the gdoc2md CLI."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os

ENV_PREFIX = "GDOC2MD_"

logger = logging.getLogger(__name__)


def env_key_for(dest: str) -> str:
    """Return the environment variable name that supplies a default for ``dest``."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_')}"


def _dest_from_option_strings(option_strings) -> str | None:
    for option in option_strings:
        if option.startswith("--"):
            return option[2:].replace("-", "_")
    return None


class EnvironmentAwareAction(argparse.Action):
    """Store action whose default comes from a ``GDOC2MD_<DEST>`` environment variable.

    The variable is read when the parser is built, so an explicit command-line
    value always wins over it. Values outside ``choices`` are ignored with a
    warning.
    """

    def __init__(self, option_strings, dest=None, **kwargs):
        dest = dest or _dest_from_option_strings(option_strings)
        env_key = env_key_for(dest)
        env_value = os.environ.get(env_key)
        if env_value is not None:
            choices = kwargs.get("choices")
            if choices is not None and env_value not in choices:
                logger.warning(f"Ignoring invalid environment variable {env_key}={env_value!r}")
            else:
                kwargs["default"] = env_value

        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        """Store the value."""
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Store-true action whose default comes from a ``GDOC2MD_<DEST>`` environment variable."""

    def __init__(self, option_strings, dest=None, **kwargs):
        dest = dest or _dest_from_option_strings(option_strings)
        env_value = os.environ.get(env_key_for(dest))
        if env_value is not None:
            kwargs["default"] = env_value.lower() in ("true", "1", "yes", "on")

        super().__init__(option_strings, dest, **kwargs)
