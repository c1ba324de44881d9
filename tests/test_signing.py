import pytest

from liqpay_client import (
    Credentials,
    CredentialsError,
    SignatureAlgorithm,
    SignedEnvelope,
    encode,
    sign,
)
from liqpay_client.core.signing import compute_signature, sign_params

EXAMPLE_PARAMS = {"amount": "100", "currency": "USD", "order_id": "ORD1"}
EXAMPLE_DATA = "eyJhbW91bnQiOiIxMDAiLCJjdXJyZW5jeSI6IlVTRCIsIm9yZGVyX2lkIjoiT1JEMSJ9"
EXAMPLE_SHA1_SIGNATURE = "rODSnmrJ1gq5DYNyDZ/SvkS+Vhs="
EXAMPLE_SHA3_SIGNATURE = "+/EOKslOhk8AueelGXjm08MaFoFXCAlgOVenIkj8i44="


def test_sign_example_vector(credentials):
    envelope = sign(encode(EXAMPLE_PARAMS), credentials)
    assert envelope == SignedEnvelope(
        public_key="sandbox_i00000000",
        data=EXAMPLE_DATA,
        signature=EXAMPLE_SHA1_SIGNATURE,
    )


def test_sign_supports_sha3(credentials):
    envelope = sign(encode(EXAMPLE_PARAMS), credentials, algorithm="sha3-256")
    assert envelope.signature == EXAMPLE_SHA3_SIGNATURE


def test_sign_is_deterministic(credentials):
    payload = encode({"action": "status", "order_id": "A-1", "version": 7})
    assert sign(payload, credentials) == sign(payload, credentials)


def test_sign_params_matches_sign(credentials):
    assert sign_params(EXAMPLE_PARAMS, credentials) == sign(encode(EXAMPLE_PARAMS), credentials)


def test_compute_signature_wraps_data_with_private_key():
    assert compute_signature(EXAMPLE_DATA, "sekret") == EXAMPLE_SHA1_SIGNATURE


def test_different_keys_give_different_signatures(credentials):
    other = Credentials(public_key=credentials.public_key, private_key="another")
    payload = encode(EXAMPLE_PARAMS)
    assert sign(payload, credentials).signature != sign(payload, other).signature


@pytest.mark.parametrize("private_key", ["", "with space", "tab\there", None])
def test_sign_rejects_bad_private_key(private_key):
    creds = Credentials(public_key="sandbox_i00000000", private_key=private_key)
    with pytest.raises(CredentialsError):
        sign(encode(EXAMPLE_PARAMS), creds)


def test_sign_rejects_empty_public_key():
    with pytest.raises(CredentialsError):
        sign(encode(EXAMPLE_PARAMS), Credentials(public_key="", private_key="sekret"))


def test_envelope_form_fields(credentials):
    envelope = sign(encode(EXAMPLE_PARAMS), credentials)
    assert envelope.as_form() == {"data": EXAMPLE_DATA, "signature": EXAMPLE_SHA1_SIGNATURE}


def test_private_key_stays_out_of_repr(credentials):
    assert "sekret" not in repr(credentials)
    assert "sandbox_i00000000" in repr(credentials)


def test_unknown_algorithm_is_rejected():
    with pytest.raises(ValueError):
        SignatureAlgorithm.parse("md5")
