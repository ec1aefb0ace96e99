"""
Utility Functions
=================

This module provides the algebraic helpers the protocol engine consumes
from charm-crypto.

Key Operations:
- Multi-exponentiation: Compute ∏ g_i^{e_i} (the MSM of additive notation)
- Canonical encodings: scalars as fixed-width little-endian integers,
  G1 elements as charm's compressed point encoding
- Sizing predicate: power-of-two check shared by prove and verify

According to charm-crypto documentation:
- Group operations use * for multiplication, ** for exponentiation
- group.serialize(elem) / group.deserialize(data) give the point encoding
"""

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1
from typing import List

from .errors import SerializationError, VectorLenMismatch
from .groups import scalar_byte_length

# charm tags serialized elements with their group type: ZR=0, G1=1, G2=2, GT=3
G1_PREFIX = b"1:"


def is_power_of_two(m: int) -> bool:
    """True for 1, 2, 4, 8, ...; False for zero and negative values."""
    return m > 0 and (m & (m - 1)) == 0


def multiexp_g1(bases: List[G1], exponents: List[ZR], group: PairingGroup) -> G1:
    """
    Compute multi-exponentiation in G1: ∏ bases[i]^{exponents[i]}.

    Formula:
    --------
    result = ∏_{i=0}^{len(bases)-1} bases[i]^{exponents[i]}

    Parameters
    ----------
    bases : List[G1]
        List of base elements in G1
    exponents : List[ZR]
        List of exponents in Z_p
    group : PairingGroup
        The pairing group

    Returns
    -------
    G1
        The product ∏ bases[i]^{exponents[i]}

    Raises
    ------
    VectorLenMismatch
        If bases and exponents differ in length

    Notes
    -----
    - If bases is empty, returns the identity element 1_G
    - The product is computed directly, without a windowed MSM algorithm
    """
    if len(bases) != len(exponents):
        raise VectorLenMismatch(
            f"bases and exponents must have same length: {len(bases)} != {len(exponents)}")

    result = group.init(G1, 1)
    for base, exp in zip(bases, exponents):
        result *= base ** exp

    return result


def scalar_to_bytes(elem: ZR, group: PairingGroup) -> bytes:
    """
    Canonical little-endian encoding of a scalar.

    The canonical integer representative in [0, p) is written in
    ``scalar_byte_length(group)`` bytes, least significant byte first.
    """
    p = int(group.order())
    return (int(elem) % p).to_bytes(scalar_byte_length(group), 'little')


def scalar_from_bytes(data: bytes, group: PairingGroup) -> ZR:
    """
    Decode a canonical little-endian scalar.

    Raises
    ------
    SerializationError
        If the length is wrong or the integer is not reduced modulo p
    """
    width = scalar_byte_length(group)
    if len(data) != width:
        raise SerializationError(f"scalar encoding must be {width} bytes, got {len(data)}")
    value = int.from_bytes(data, 'little')
    if value >= int(group.order()):
        raise SerializationError("scalar encoding is not reduced modulo the group order")
    return group.init(ZR, value)


def scalar_from_bytes_mod_order(data: bytes, group: PairingGroup) -> ZR:
    """Interpret arbitrary bytes as a little-endian integer reduced modulo p."""
    return group.init(ZR, int.from_bytes(data, 'little') % int(group.order()))


def serialize_element(elem: G1, group: PairingGroup) -> bytes:
    """
    Serialize a G1 element to its canonical (compressed) encoding.

    Raises
    ------
    SerializationError
        If charm-crypto cannot encode the element
    """
    try:
        return group.serialize(elem)
    except Exception as e:
        raise SerializationError(f"cannot serialize group element: {e}") from e


def deserialize_element(data: bytes, group: PairingGroup) -> G1:
    """
    Deserialize a G1 element and check that it is a non-identity member.

    Raises
    ------
    SerializationError
        If the data does not decode to a valid, non-identity G1 element
    """
    if not isinstance(data, (bytes, bytearray)) or not bytes(data).startswith(G1_PREFIX):
        raise SerializationError("encoding is not tagged as a G1 element")

    try:
        elem = group.deserialize(bytes(data))
    except Exception as e:
        raise SerializationError(f"cannot deserialize group element: {e}") from e

    if elem is None or elem is False or not group.ismember(elem):
        raise SerializationError("decoded data is not a group element")
    if elem == group.init(G1, 1):
        raise SerializationError("identity element is not a valid protocol input")
    return elem
