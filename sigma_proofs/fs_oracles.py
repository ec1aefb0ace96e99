"""
Fiat-Shamir Transcript
======================

This module implements the transcript used to make the sigma protocol
non-interactive. The verifier's random challenge is replaced by a hash of
everything the prover has sent so far.

Transcript:
-----------
- absorb(label, data): append labeled bytes to the running state
- derive(label, n_bytes): squeeze n_bytes depending on every prior absorb
  and on the derive label

Domain Separation:
------------------
- The transcript is keyed by a top-level protocol label
  (``config.transcript_label``)
- Every absorb and derive carries its own label, length-prefixed, so that
  no two different sequences of calls feed the same bytes to the hash
- Challenges are converted to ZR by little-endian reduction modulo the
  group order; deriving more bytes than the order makes the bias negligible

Ordering:
---------
Values that determine a challenge must be absorbed before that challenge
is derived. ``derive_challenges`` is the only place the protocol does this.
"""

import hashlib
from typing import Tuple

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .config import config
from .errors import FaultyParameterSize
from .groups import scalar_byte_length
from .utils import scalar_from_bytes_mod_order, scalar_to_bytes, serialize_element

LABEL_T = b"first message, the linear form eval t"
LABEL_A_HAT = b"first message, the msm eval A_hat"
LABEL_C0 = b"c0"
LABEL_C1 = b"c1"


def _frame(data: bytes) -> bytes:
    return len(data).to_bytes(8, 'big') + data


class Transcript:
    """
    SHA-256 based absorb/derive transcript.

    Parameters
    ----------
    label : bytes or str
        Top-level domain separation label for this protocol instance
    """

    def __init__(self, label):
        label_b = label.encode('utf-8') if isinstance(label, str) else bytes(label)
        self.state = hashlib.sha256(b"transcript" + _frame(label_b)).digest()

    def absorb(self, label: bytes, data: bytes):
        h = hashlib.sha256()
        h.update(self.state)
        h.update(b"absorb")
        h.update(_frame(bytes(label)))
        h.update(_frame(bytes(data)))
        self.state = h.digest()

    def derive(self, label: bytes, n_bytes: int) -> bytes:
        """
        Squeeze ``n_bytes`` pseudorandom bytes.

        The output is expanded from H(state || "derive" || label) with a
        32-bit block counter. Afterwards the state is ratcheted with the
        label, so a later derive under any label yields fresh output.
        """
        seed = hashlib.sha256(self.state + b"derive" + _frame(bytes(label))).digest()

        out = b""
        counter = 0
        while len(out) < n_bytes:
            out += hashlib.sha256(seed + counter.to_bytes(4, 'big')).digest()
            counter += 1

        self.absorb(b"derived", bytes(label))
        return out[:n_bytes]

    def challenge_scalar(self, label: bytes, group: PairingGroup, n_bytes: int = None) -> ZR:
        """
        Derive a challenge in ZR from ``n_bytes`` of transcript output.

        Raises
        ------
        FaultyParameterSize
            If fewer bytes than a scalar encoding are requested
        """
        if n_bytes is None:
            n_bytes = config.challenge_bytes
        if n_bytes < scalar_byte_length(group):
            raise FaultyParameterSize(
                f"challenge width {n_bytes} bytes is below the scalar width {scalar_byte_length(group)}")
        return scalar_from_bytes_mod_order(self.derive(label, n_bytes), group)


def derive_challenges(t: ZR, A_hat: G1, group: PairingGroup) -> Tuple[ZR, ZR]:
    """
    Recompute the protocol challenges (c0, c1) from the first message.

    Prover and verifier both call this, so a proof verifies only if both
    sides absorb byte-identical encodings of t and A_hat.

    Parameters
    ----------
    t : ZR
        The linear form evaluated at the blinding vector
    A_hat : G1
        The commitment to the blinding vector
    group : PairingGroup
        The pairing group

    Returns
    -------
    Tuple[ZR, ZR]
        (c0, c1). The direct protocol only uses c0; c1 is derived for
        transcript compatibility with the compressed variant.

    Raises
    ------
    SerializationError
        If A_hat cannot be canonically encoded
    FaultyParameterSize
        If ``config.challenge_bytes`` is narrower than a scalar
    """
    transcript = Transcript(config.transcript_label_bytes)
    transcript.absorb(LABEL_T, scalar_to_bytes(t, group))
    transcript.absorb(LABEL_A_HAT, serialize_element(A_hat, group))

    c0 = transcript.challenge_scalar(LABEL_C0, group)
    c1 = transcript.challenge_scalar(LABEL_C1, group)
    return c0, c1
