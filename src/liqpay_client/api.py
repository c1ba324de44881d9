"""
Public, high-level helpers for talking to the LiqPay API.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import LiqPayClient, Transport, send_request as _send_request
from .core.config import ClientConfig, ClientParameters, load_client_config
from .core.operations import OperationRequest
from .core.responses import LiqPayResponse
from .core.signing import SignatureAlgorithm

__all__ = [
    "create_client",
    "send_request",
]


def _resolve_config(
    config: Optional[ClientConfig],
    *,
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    parameters: Optional[ClientParameters],
    public_key: Optional[str],
    private_key: Optional[str],
    api_url: Optional[str],
    checkout_url: Optional[str],
    api_version: Optional[int | str],
    signature_algorithm: Optional[SignatureAlgorithm | str],
    timeout_seconds: Optional[float | int | str],
    sandbox: Optional[bool | str],
) -> ClientConfig:
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            public_key,
            private_key,
            api_url,
            checkout_url,
            api_version,
            signature_algorithm,
            timeout_seconds,
            sandbox,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        return config
    return load_client_config(
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


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
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
) -> LiqPayClient:
    """
    Construct a :class:`LiqPayClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    cfg = _resolve_config(
        config,
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
    return LiqPayClient(cfg, transport=transport, session=session)


def send_request(
    request: OperationRequest,
    *,
    config: Optional[ClientConfig] = None,
    transport: Optional[Transport] = None,
    session: Optional[requests.Session] = None,
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
) -> LiqPayResponse:
    """
    High-level convenience wrapper: resolve configuration, sign and send.
    """
    cfg = _resolve_config(
        config,
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
    return _send_request(cfg, request, transport=transport, session=session)
