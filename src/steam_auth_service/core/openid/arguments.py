"""Required callback argument extraction and validation."""

from typing import Mapping

from .constants import DEFAULT_CONFIG, MODE_ID_RES, UNSIGNED_REQUIRED_FIELDS, SteamOpenIDConfig, openid_key
from .errors import (
    InvalidModeError,
    InvalidNamespaceError,
    InvalidSignedFieldsError,
    MissingParameterError,
)


def validate_arguments(
    params: Mapping[str, str],
    config: SteamOpenIDConfig = DEFAULT_CONFIG
) -> dict[str, str]:
    """Pull the required openid.* fields out of the callback parameters.

    Signed fields are collected first, in signing order, followed by
    mode, sig and ns. The returned dict keeps that order so it can be
    posted back to Steam as-is.

    Args:
        params: Callback query parameters
        config: Provider constants

    Returns:
        Validated arguments keyed by their namespaced names

    Raises:
        MissingParameterError: A required field is absent or empty
        InvalidModeError: openid.mode is not id_res
        InvalidNamespaceError: openid.ns is not the OpenID 2.0 namespace
        InvalidSignedFieldsError: openid.signed differs from the fixed list
    """
    args: dict[str, str] = {}

    for name in (*config.signed_fields, *UNSIGNED_REQUIRED_FIELDS):
        key = openid_key(name)
        value = params.get(key)
        if not value:
            raise MissingParameterError(key)
        args[key] = value

    if args["openid.mode"] != MODE_ID_RES:
        raise InvalidModeError(MODE_ID_RES, args["openid.mode"])
    if args["openid.ns"] != config.namespace:
        raise InvalidNamespaceError(config.namespace, args["openid.ns"])
    if args["openid.signed"] != config.expected_signed:
        raise InvalidSignedFieldsError(config.expected_signed, args["openid.signed"])

    return args
