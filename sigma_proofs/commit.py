"""
Commitment Generation
=====================

This module computes the public statement the sigma protocol proves:

- P: Pedersen vector commitment to the witness vector x with blinding γ
- y: The claimed evaluation of the linear form at x
"""

from charm.toolbox.pairinggroup import ZR, G1
from typing import List, Tuple

from .errors import VectorLenMismatch
from .utils import multiexp_g1


def commit_vector(x: List[ZR], gamma: ZR, params: dict) -> G1:
    """
    Generate the Pedersen vector commitment P to x with randomness γ.

    Formula (Pedersen vector commitment):
    -------------------------------------
    P := h^{γ} · ∏_{i=1}^n g_i^{x_i} ∈ G

    Parameters
    ----------
    x : List[ZR]
        The witness vector (x_1, ..., x_n) in Z_p^n
    gamma : ZR
        The blinding γ ∈ Z_p
    params : dict
        The public parameters from keygen_params()

    Returns
    -------
    G1
        The commitment P

    Notes
    -----
    The commitment is binding under discrete log hardness and perfectly
    hiding because of γ.

    Examples
    --------
    >>> x = [group.random(ZR) for _ in range(n)]
    >>> gamma = group.random(ZR)
    >>> P = commit_vector(x, gamma, params)
    """
    group = params['group']
    g_list = params['g_list']

    if len(x) != len(g_list):
        raise VectorLenMismatch(f"Witness vector length {len(x)} != n={len(g_list)}")

    return multiexp_g1(g_list, list(x), group) * (params['h'] ** gamma)


def make_statement(witness, linear_form, params: dict) -> Tuple[G1, ZR]:
    """Public statement (P, y) for a witness: its commitment and L(x)."""
    P = commit_vector(witness.x, witness.gamma, params)
    y = linear_form.eval(witness.x)
    return P, y
