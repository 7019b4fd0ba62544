"""
Digest Engine

Computes and compares cryptographic digests of byte payloads.
All functions are pure; nothing here touches storage.
"""

import hashlib
import logging
import re
from typing import Dict, Union

from integrity_service.core.exceptions import UnsupportedAlgorithm
from integrity_service.models.document import DIGEST_LENGTHS, DigestAlgorithm
from integrity_service.models.integrity import DigestComparison

logger = logging.getLogger(__name__)

_HEX = re.compile(r"^[0-9a-fA-F]+$")


def resolve_algorithm(algorithm: Union[str, DigestAlgorithm]) -> DigestAlgorithm:
    """
    Parse an algorithm name into a DigestAlgorithm

    Args:
        algorithm: Algorithm enum member or case-insensitive name

    Returns:
        DigestAlgorithm member

    Raises:
        UnsupportedAlgorithm: If the name is not one of md5, sha1, sha256, sha512
    """
    if isinstance(algorithm, DigestAlgorithm):
        return algorithm
    try:
        return DigestAlgorithm(str(algorithm).strip().lower())
    except ValueError:
        supported = ", ".join(a.value for a in DigestAlgorithm)
        raise UnsupportedAlgorithm(
            f"Unsupported digest algorithm: {algorithm} (supported: {supported})"
        ) from None


def digest(payload: bytes, algorithm: Union[str, DigestAlgorithm] = DigestAlgorithm.SHA256) -> str:
    """
    Compute the lowercase hex digest of a payload

    Args:
        payload: Bytes to hash
        algorithm: Digest algorithm

    Returns:
        Lowercase hexadecimal digest

    Raises:
        UnsupportedAlgorithm: If algorithm is outside the supported set
    """
    algo = resolve_algorithm(algorithm)
    value = hashlib.new(algo.value, payload).hexdigest()
    logger.debug(f"Digest generated using {algo.value}: {value[:16]}...")
    return value


def compare(
    payload: bytes,
    expected_hex: str,
    algorithm: Union[str, DigestAlgorithm] = DigestAlgorithm.SHA256
) -> DigestComparison:
    """
    Recompute a payload's digest and compare it to an expected value

    Comparison is case-insensitive and requires the full string to match.
    """
    algo = resolve_algorithm(algorithm)
    actual = digest(payload, algo)
    is_valid = actual == expected_hex.lower()

    logger.info(f"Digest verification result: {'VALID' if is_valid else 'INVALID'}")
    return DigestComparison(
        is_valid=is_valid,
        actual_digest=actual,
        expected_digest=expected_hex,
        algorithm=algo
    )


def validate_format(value: str, algorithm: Union[str, DigestAlgorithm] = DigestAlgorithm.SHA256) -> bool:
    """Check that value is hex of exactly the length the algorithm produces"""
    try:
        algo = resolve_algorithm(algorithm)
    except UnsupportedAlgorithm:
        return False
    return bool(_HEX.match(value)) and len(value) == DIGEST_LENGTHS[algo]


def digest_all(payload: bytes) -> Dict[DigestAlgorithm, str]:
    """Compute the payload digest under every supported algorithm"""
    return {algo: digest(payload, algo) for algo in DigestAlgorithm}
