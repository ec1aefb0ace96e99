"""
Sigma Protocol for Linear Form Openings
=======================================

This module implements protocol 5 of https://eprint.iacr.org/2020/152 in
its direct (non-compressed) form, made non-interactive with Fiat-Shamir.

Relation:
---------
Public:  generators g_1..g_n, h, k; commitment P; linear form L; value y
Secret:  x ∈ Z_p^n, γ ∈ Z_p
Claim:   P = h^{γ} · ∏ g_i^{x_i}   and   L(x) = y

Prover:
-------
1. Sample ρ ∈ Z_p and r ∈ Z_p^n
2. t = L(r),  Â = h^{ρ} · ∏ g_i^{r_i}
3. (c0, c1) = FS(t, Â)
4. z_i = c0 · x_i + r_i,  φ = c0 · γ + ρ

Verifier:
---------
(c0, c1) = FS(t, Â), then accept iff
    h^{φ} · ∏ g_i^{z_i} = P^{c0} · Â      (group relation)
    L(z) = c0 · y + t                     (linear relation)

Sizing:
-------
n + 1 and the size of L must be powers of two, and L must have size
n + 1. All sizing checks run before any secret-dependent computation.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from charm.toolbox.pairinggroup import ZR, G1

from .commit import make_statement
from .errors import InvalidResponse, NotPowerOfTwo, VectorLenMismatch
from .fs_oracles import derive_challenges
from .linear_form import LinearForm
from .randomness import GroupRandomness
from .utils import is_power_of_two, multiexp_g1

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Witness:
    """The prover's secret opening (x, γ). Never serialized."""
    x: Tuple[ZR, ...] = field(repr=False)
    gamma: ZR = field(repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'x', tuple(self.x))


@dataclass(frozen=True)
class Proof:
    """
    Non-interactive proof (t, Â, z, φ).

    t is L(r), A_hat is the commitment to the blinding vector, z the masked
    witness and phi the masked blinding.
    """
    t: ZR
    A_hat: G1
    z: Tuple[ZR, ...]
    phi: ZR

    def __post_init__(self):
        object.__setattr__(self, 'z', tuple(self.z))


def _check_power_of_two_sizes(n: int, linear_form: LinearForm):
    if not is_power_of_two(n + 1):
        raise NotPowerOfTwo(f"n + 1 = {n + 1} is not a power of two")
    if not is_power_of_two(linear_form.size()):
        raise NotPowerOfTwo(f"linear form size {linear_form.size()} is not a power of two")


def _check_form_matches_generators(n: int, linear_form: LinearForm):
    if n + 1 != linear_form.size():
        raise VectorLenMismatch(
            f"linear form size {linear_form.size()} != n + 1 = {n + 1}")


def prove(witness: Witness, linear_form: LinearForm, params: dict, rng=None) -> Proof:
    """
    Prove knowledge of (x, γ) opening P with L(x) = y.

    Parameters
    ----------
    witness : Witness
        The secret vector x (length n) and blinding γ
    linear_form : LinearForm
        The public linear form, of size n + 1
    params : dict
        The public parameters from keygen_params()
    rng : optional
        Sampler with ``scalar()`` and ``vector(n)`` methods. Defaults to
        GroupRandomness over the parameter group.

    Returns
    -------
    Proof
        The proof (t, Â, z, φ)

    Raises
    ------
    NotPowerOfTwo
        If n + 1 or the linear form size is not a power of two
    VectorLenMismatch
        If len(x) != n or the linear form size != n + 1
    SerializationError
        If Â cannot be canonically encoded into the transcript
    """
    group = params['group']
    g_list = params['g_list']
    h = params['h']
    n = len(g_list)

    _check_power_of_two_sizes(n, linear_form)
    if len(witness.x) != n:
        raise VectorLenMismatch(f"witness length {len(witness.x)} != n = {n}")
    _check_form_matches_generators(n, linear_form)

    if rng is None:
        rng = GroupRandomness(group)

    logger.debug("Proving linear form opening for n=%d", n)

    # First message
    rho = rng.scalar()
    r = rng.vector(n)
    t = linear_form.eval(r)
    A_hat = multiexp_g1(g_list, r, group) * (h ** rho)

    c0, _c1 = derive_challenges(t, A_hat, group)

    # Response
    z = [c0 * x_i + r_i for x_i, r_i in zip(witness.x, r)]
    phi = c0 * witness.gamma + rho

    return Proof(t=t, A_hat=A_hat, z=z, phi=phi)


def verify(proof: Proof, linear_form: LinearForm, P: G1, y: ZR, params: dict):
    """
    Verify a proof that P opens to some x with L(x) = y.

    Parameters
    ----------
    proof : Proof
        The proof to check
    linear_form : LinearForm
        The public linear form, of size n + 1
    P : G1
        The public commitment
    y : ZR
        The claimed evaluation L(x)
    params : dict
        The public parameters from keygen_params(). ``k`` is part of the
        parameter set but not used by the direct protocol.

    Returns
    -------
    None
        Returns normally iff the proof is accepted

    Raises
    ------
    InvalidResponse
        If A_hat or P is the identity, or the group relation or the
        linear relation does not hold
    NotPowerOfTwo
        If n + 1 or the linear form size is not a power of two
    VectorLenMismatch
        If the linear form size != n + 1 or len(z) != n
    SerializationError
        If Â cannot be canonically encoded into the transcript
    """
    group = params['group']
    g_list = params['g_list']
    h = params['h']
    n = len(g_list)

    _check_power_of_two_sizes(n, linear_form)
    _check_form_matches_generators(n, linear_form)
    if len(proof.z) != n:
        raise VectorLenMismatch(f"response length {len(proof.z)} != n = {n}")

    identity = group.init(G1, 1)
    if proof.A_hat == identity:
        logger.info("Proof rejected: A_hat is the identity")
        raise InvalidResponse("A_hat is the identity element")
    if P == identity:
        logger.info("Proof rejected: commitment is the identity")
        raise InvalidResponse("commitment P is the identity element")

    logger.debug("Verifying linear form opening for n=%d", n)

    c0, _c1 = derive_challenges(proof.t, proof.A_hat, group)

    lhs = multiexp_g1(g_list, list(proof.z), group) * (h ** proof.phi)
    rhs = (P ** c0) * proof.A_hat
    if lhs != rhs:
        logger.info("Proof rejected: group relation does not hold")
        raise InvalidResponse("group relation h^phi * g^z != P^c0 * A_hat")

    if linear_form.eval(proof.z) != c0 * y + proof.t:
        logger.info("Proof rejected: linear relation does not hold")
        raise InvalidResponse("linear relation L(z) != c0 * y + t")

    logger.debug("Proof accepted")


def is_valid(proof: Proof, linear_form: LinearForm, P: G1, y: ZR, params: dict) -> bool:
    """
    Boolean form of ``verify``.

    Only a rejected proof maps to False; sizing and serialization errors
    still propagate.
    """
    try:
        verify(proof, linear_form, P, y, params)
    except InvalidResponse:
        return False
    return True


def prove_statement(x: Sequence[ZR], gamma: ZR, linear_form: LinearForm, params: dict,
                    rng=None):
    """Convenience wrapper: build the witness, prove, and return (proof, P, y)."""
    witness = Witness(x=x, gamma=gamma)
    proof = prove(witness, linear_form, params, rng=rng)
    P, y = make_statement(witness, linear_form, params)
    return proof, P, y
