"""Public key loading and algorithm/key compatibility checks."""

from collections.abc import Iterable

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePublicKey
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

KeyMaterial = str | bytes | RSAPublicKey | EllipticCurvePublicKey

HMAC_FAMILY = "hmac"
RSA_FAMILY = "rsa"
EC_FAMILY = "ec"

_ALGORITHM_FAMILIES = {
    "HS256": HMAC_FAMILY,
    "HS384": HMAC_FAMILY,
    "HS512": HMAC_FAMILY,
    "RS256": RSA_FAMILY,
    "RS384": RSA_FAMILY,
    "RS512": RSA_FAMILY,
    "PS256": RSA_FAMILY,
    "PS384": RSA_FAMILY,
    "PS512": RSA_FAMILY,
    "ES256": EC_FAMILY,
    "ES384": EC_FAMILY,
    "ES512": EC_FAMILY,
}

_PEM_MARKER = "-----BEGIN"


def load_public_key(public_key_pem: str) -> RSAPublicKey | EllipticCurvePublicKey:
    """Load a PEM public key usable for RSA, PSS or ECDSA verification."""
    loaded = serialization.load_pem_public_key(public_key_pem.encode())
    if not isinstance(loaded, (RSAPublicKey, EllipticCurvePublicKey)):
        raise ValueError(f"Unsupported public key type '{type(loaded).__name__}'")
    return loaded


def key_family(algorithm: str) -> str:
    """Return the key family ('hmac', 'rsa' or 'ec') an algorithm needs."""
    try:
        return _ALGORITHM_FAMILIES[algorithm]
    except KeyError:
        raise ValueError(f"Unsupported algorithm '{algorithm}'") from None


def _family_of_key(key: KeyMaterial) -> str:
    if isinstance(key, RSAPublicKey):
        return RSA_FAMILY
    if isinstance(key, EllipticCurvePublicKey):
        return EC_FAMILY
    if isinstance(key, bytes):
        key = key.decode(errors="ignore")
    if isinstance(key, str):
        if not key:
            raise ValueError("Shared secret must not be empty")
        # PEM text passed as a secret would let HMAC verify against a public key
        if _PEM_MARKER in key:
            raise ValueError("PEM material must be loaded with load_public_key")
        return HMAC_FAMILY
    raise ValueError(f"Unsupported key material type '{type(key).__name__}'")


def ensure_compatible(algorithms: Iterable[str], key: KeyMaterial) -> None:
    """Reject any algorithm whose key family differs from the key's."""
    family = _family_of_key(key)
    for algorithm in sorted(algorithms):
        needed = key_family(algorithm)
        if needed != family:
            raise ValueError(
                f"Algorithm '{algorithm}' needs a {needed} key "
                f"but a {family} key was supplied"
            )
