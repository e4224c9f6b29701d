"""YAML loading for configuration files, with ``!env`` tags resolved from the environment."""

import os
from typing import Any

import yaml


class EnvSafeLoader(yaml.SafeLoader):
    """SafeLoader that understands ``!env VAR`` and ``!env [VAR, default]``."""


def _env_error(message: str, node: yaml.Node) -> yaml.constructor.ConstructorError:
    return yaml.constructor.ConstructorError(None, None, message, node.start_mark)


def _construct_env(loader: EnvSafeLoader, node: yaml.Node) -> Any:
    if isinstance(node, yaml.ScalarNode):
        var_name, has_default, default = loader.construct_scalar(node), False, None
    elif isinstance(node, yaml.SequenceNode):
        values = loader.construct_sequence(node)
        if len(values) != 2:
            raise _env_error(f'!env sequence must have exactly 2 elements [var_name, default], got {len(values)}', node)
        (var_name, default), has_default = values, True
    else:
        raise _env_error(f'!env tag expects scalar (var_name) or sequence ([var_name, default]), got {type(node).__name__}', node)

    if not isinstance(var_name, str) or not var_name:
        raise _env_error(f'Environment variable name must be a non-empty string, got {var_name!r}', node)

    value = os.getenv(var_name)
    if value is not None:
        return value
    if has_default:
        return default
    raise ValueError(f"Required environment variable '{var_name}' is not set")


EnvSafeLoader.add_constructor('!env', _construct_env)


def safe_load_with_env(stream) -> Any:
    """Same contract as ``yaml.safe_load`` plus ``!env`` support."""
    return yaml.load(stream, Loader=EnvSafeLoader)
