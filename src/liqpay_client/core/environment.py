"""
Layered LiqPay settings: the process environment, a ``.env`` file and explicit
overrides.

Only ``LIQPAY_*`` keys survive the merge. Every resolved key remembers the
layer that supplied it, and the private key is masked whenever the settings
are printed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Optional

from .errors import ConfigError

ENV_PREFIX = "LIQPAY_"
SECRET_KEYS = frozenset({"LIQPAY_PRIVATE_KEY"})


class SettingSource(str, Enum):
    ENVIRON = "environment"
    ENV_FILE = "env file"
    OVERRIDE = "override"


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    # unquoted values may carry a trailing comment
    return value.split(" #", 1)[0].rstrip()


def read_env_file(path: Path) -> Dict[str, str]:
    """
    Return the ``LIQPAY_*`` assignments found in ``path``.

    A missing file yields an empty mapping. Lines that are not comments and
    not ``KEY=VALUE`` assignments raise :class:`ConfigError` with the line
    number, so a typo in the key file is not silently ignored.
    """
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for number, raw_line in enumerate(data.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"{path}:{number}: expected KEY=VALUE")
        if key.startswith(ENV_PREFIX):
            values[key] = _unquote(value)
    return values


@dataclass(frozen=True, repr=False)
class ClientEnvironment:
    """Resolved ``LIQPAY_*`` settings and the layer each one came from."""

    variables: Mapping[str, str]
    sources: Mapping[str, SettingSource] = field(default_factory=dict)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def source_of(self, key: str) -> Optional[SettingSource]:
        return self.sources.get(key)

    def require(self, key: str) -> str:
        raw = self.variables.get(key)
        if raw is None:
            raise ConfigError(f"{key} must be provided")
        value = raw.strip()
        if not value:
            source = self.source_of(key)
            where = f" (empty in {source.value})" if source is not None else ""
            raise ConfigError(f"{key} must be provided{where}")
        return value

    def __repr__(self) -> str:
        shown = {
            key: "***" if key in SECRET_KEYS else value
            for key, value in sorted(self.variables.items())
        }
        return f"ClientEnvironment({shown!r})"


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Assemble a :class:`ClientEnvironment` from up to three layers.

    ``base`` defaults to :data:`os.environ` and wins over the ``.env`` file;
    pass ``env_file=None`` to skip the file. ``overrides`` always win. Keys
    without the ``LIQPAY_`` prefix are dropped from every layer.
    """
    variables: Dict[str, str] = {}
    sources: Dict[str, SettingSource] = {}

    for key, value in (os.environ if base is None else base).items():
        if key.startswith(ENV_PREFIX):
            variables[key] = value
            sources[key] = SettingSource.ENVIRON

    if env_file is not None:
        for key, value in read_env_file(Path(env_file)).items():
            if key not in variables:
                variables[key] = value
                sources[key] = SettingSource.ENV_FILE

    for key, value in (overrides or {}).items():
        if not key.startswith(ENV_PREFIX):
            logging.warning("Ignoring override %s: only LIQPAY_* settings apply", key)
            continue
        variables[key] = value
        sources[key] = SettingSource.OVERRIDE

    logging.debug(
        "Resolved LiqPay settings: %s",
        ", ".join(f"{key} from {sources[key].value}" for key in sorted(sources)),
    )
    return ClientEnvironment(variables=variables, sources=sources)
