"""
Configuration objects and helpers for the LiqPay client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .environment import ClientEnvironment, build_environment
from .errors import ConfigError, CredentialsError
from .operations import API_VERSION
from .signing import Credentials, SignatureAlgorithm

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "load_client_config",
]

DEFAULT_API_URL = "https://www.liqpay.ua/api/request"
DEFAULT_CHECKOUT_URL = "https://www.liqpay.ua/api/3/checkout"

_PARAMETER_TO_ENV_KEY = {
    "public_key": "LIQPAY_PUBLIC_KEY",
    "private_key": "LIQPAY_PRIVATE_KEY",
    "api_url": "LIQPAY_API_URL",
    "checkout_url": "LIQPAY_CHECKOUT_URL",
    "api_version": "LIQPAY_API_VERSION",
    "signature_algorithm": "LIQPAY_SIGNATURE_ALGORITHM",
    "timeout_seconds": "LIQPAY_TIMEOUT_SECONDS",
    "sandbox": "LIQPAY_SANDBOX",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, SignatureAlgorithm):
        return value.value
    return str(value)


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_client_config`.
    """

    public_key: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    api_url: Optional[str] = None
    checkout_url: Optional[str] = None
    api_version: Optional[int | str] = None
    signature_algorithm: Optional[SignatureAlgorithm | str] = None
    timeout_seconds: Optional[float | int | str] = None
    sandbox: Optional[bool | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _parse_bool(raw: str, key: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{key} must be a boolean, got '{raw}'")


def _parse_positive_int(raw: str, key: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got '{raw}'") from exc
    if value <= 0:
        raise ConfigError(f"{key} must be greater than zero")
    return value


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"LIQPAY_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if value <= 0:
        raise ConfigError("LIQPAY_TIMEOUT_SECONDS must be greater than zero")
    return value


def _normalize_url(raw: str, key: str) -> str:
    url = raw.strip().rstrip("/")
    if not url.startswith(("https://", "http://")):
        raise ConfigError(f"{key} must be an http(s) URL")
    return url


@dataclass(frozen=True)
class ClientConfig:
    public_key: str
    private_key: str = field(repr=False)
    api_url: str = DEFAULT_API_URL
    checkout_url: str = DEFAULT_CHECKOUT_URL
    api_version: int = API_VERSION
    # None lets each request type pick its own algorithm
    signature_algorithm: Optional[SignatureAlgorithm] = None
    timeout_seconds: float = 30.0
    sandbox: bool = False

    @property
    def credentials(self) -> Credentials:
        return Credentials(public_key=self.public_key, private_key=self.private_key)

    @classmethod
    def from_mapping(
        cls, values: Mapping[str, str] | ClientEnvironment
    ) -> "ClientConfig":
        if not isinstance(values, ClientEnvironment):
            values = ClientEnvironment(variables=dict(values))
        public_key = values.require("LIQPAY_PUBLIC_KEY")
        private_key = values.require("LIQPAY_PRIVATE_KEY")
        try:
            Credentials(public_key=public_key, private_key=private_key).validate()
        except CredentialsError as exc:
            raise ConfigError(f"Invalid LiqPay credentials: {exc}") from exc

        api_url = _normalize_url(
            values.get("LIQPAY_API_URL", DEFAULT_API_URL), "LIQPAY_API_URL"
        )
        checkout_url = _normalize_url(
            values.get("LIQPAY_CHECKOUT_URL", DEFAULT_CHECKOUT_URL),
            "LIQPAY_CHECKOUT_URL",
        )
        api_version = _parse_positive_int(
            values.get("LIQPAY_API_VERSION", str(API_VERSION)), "LIQPAY_API_VERSION"
        )

        algorithm_raw = (values.get("LIQPAY_SIGNATURE_ALGORITHM") or "").strip()
        signature_algorithm: Optional[SignatureAlgorithm] = None
        if algorithm_raw:
            try:
                signature_algorithm = SignatureAlgorithm.parse(algorithm_raw)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc

        timeout_seconds = _parse_timeout(values.get("LIQPAY_TIMEOUT_SECONDS", "30"))
        sandbox = _parse_bool(values.get("LIQPAY_SANDBOX", "false"), "LIQPAY_SANDBOX")

        return cls(
            public_key=public_key,
            private_key=private_key,
            api_url=api_url,
            checkout_url=checkout_url,
            api_version=api_version,
            signature_algorithm=signature_algorithm,
            timeout_seconds=timeout_seconds,
            sandbox=sandbox,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        public_key: Optional[str] = None,
        private_key: Optional[str] = None,
        api_url: Optional[str] = None,
        checkout_url: Optional[str] = None,
        api_version: Optional[int | str] = None,
        signature_algorithm: Optional[SignatureAlgorithm | str] = None,
        timeout_seconds: Optional[float | int | str] = None,
        sandbox: Optional[bool | str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "public_key": public_key,
                "private_key": private_key,
                "api_url": api_url,
                "checkout_url": checkout_url,
                "api_version": api_version,
                "signature_algorithm": signature_algorithm,
                "timeout_seconds": timeout_seconds,
                "sandbox": sandbox,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    public_key: Optional[str] = None,
    private_key: Optional[str] = None,
    api_url: Optional[str] = None,
    checkout_url: Optional[str] = None,
    api_version: Optional[int | str] = None,
    signature_algorithm: Optional[SignatureAlgorithm | str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    sandbox: Optional[bool | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can come from environment variables, a ``.env`` file,
    direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        public_key=public_key,
        private_key=private_key,
        api_url=api_url,
        checkout_url=checkout_url,
        api_version=api_version,
        signature_algorithm=signature_algorithm,
        timeout_seconds=timeout_seconds,
        sandbox=sandbox,
    )
