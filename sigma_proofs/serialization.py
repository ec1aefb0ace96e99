"""
Proof serialization
Encode proofs as JSON-safe dicts of base64 strings and decode them back
"""

import base64
import binascii
from typing import Any, Dict

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .errors import SerializationError
from .protocol import Proof
from .utils import deserialize_element, scalar_from_bytes, scalar_to_bytes, serialize_element


def _b64decode(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, TypeError, ValueError) as e:
        raise SerializationError(f"invalid base64 field: {e}") from e


def serialize_zr(elem: ZR, group: PairingGroup) -> str:
    """Serialize a ZR element as base64 of its canonical little-endian bytes"""
    return base64.b64encode(scalar_to_bytes(elem, group)).decode('utf-8')


def deserialize_zr(data: str, group: PairingGroup) -> ZR:
    """Deserialize a ZR element from a base64 string"""
    return scalar_from_bytes(_b64decode(data), group)


def serialize_g1(elem: G1, group: PairingGroup) -> str:
    """Serialize a G1 element as base64 of its canonical encoding"""
    return base64.b64encode(serialize_element(elem, group)).decode('utf-8')


def deserialize_g1(data: str, group: PairingGroup) -> G1:
    """Deserialize a G1 element from a base64 string; the identity is rejected"""
    return deserialize_element(_b64decode(data), group)


def serialize_proof(proof: Proof, group: PairingGroup) -> Dict[str, Any]:
    """Serialize a proof (t, A_hat, z, phi)"""
    return {
        't': serialize_zr(proof.t, group),
        'A_hat': serialize_g1(proof.A_hat, group),
        'z': [serialize_zr(z_i, group) for z_i in proof.z],
        'phi': serialize_zr(proof.phi, group),
    }


def deserialize_proof(data: Dict[str, Any], group: PairingGroup) -> Proof:
    """Deserialize a proof; any missing or malformed field raises SerializationError"""
    try:
        t, A_hat, z, phi = data['t'], data['A_hat'], data['z'], data['phi']
    except (KeyError, TypeError) as e:
        raise SerializationError(f"malformed proof encoding: {e!r}") from e

    if not isinstance(z, list):
        raise SerializationError("proof field 'z' must be a list")

    return Proof(
        t=deserialize_zr(t, group),
        A_hat=deserialize_g1(A_hat, group),
        z=[deserialize_zr(z_i, group) for z_i in z],
        phi=deserialize_zr(phi, group),
    )
