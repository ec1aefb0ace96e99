"""
Public Parameter Generation
===========================

This module generates the public parameters shared by prover and verifier:

- g_list: generator vector (g_1, ..., g_n) in G used for the vector part
- h:      auxiliary generator in G used for the blinding
- k:      auxiliary generator in G reserved for the compressed variant

Sizing:
-------
The protocol requires n + 1 to be a power of two (the compressed variant
halves a vector of length n + 1 each round), and the linear form to have
size n + 1. ``keygen_params`` builds parameters of any length; the protocol
engine enforces the sizing rules when proving and verifying.

Generators are independent uniformly random elements of G, so nobody knows
a discrete-log relation between them. They are sampled once and never
mutated.
"""

import logging

from charm.toolbox.pairinggroup import PairingGroup, G1
from typing import List

from .errors import FaultyParameterSize

logger = logging.getLogger(__name__)


def keygen_params(n: int, group: PairingGroup, g_list: List[G1] = None,
                  h: G1 = None, k: G1 = None) -> dict:
    """
    Generate the public parameters for witnesses of length n.

    Parameters
    ----------
    n : int
        The witness length. For a usable instance n + 1 must be a power of two.
    group : PairingGroup
        The initialized pairing group from setup()
    g_list : List[G1], optional
        The generator vector. If None, n random generators are chosen.
    h : G1, optional
        The blinding generator. If None, a random generator is chosen.
    k : G1, optional
        The auxiliary generator. If None, a random generator is chosen.

    Returns
    -------
    dict
        A dictionary containing:
        - 'group': The PairingGroup object
        - 'n': The witness length
        - 'g_list': List of n generators (0-indexed)
        - 'h': The blinding generator
        - 'k': The auxiliary generator

    Raises
    ------
    FaultyParameterSize
        If n is negative or a supplied g_list does not have length n

    Examples
    --------
    >>> from sigma_proofs.groups import setup
    >>> params = setup('BN254')
    >>> pp = keygen_params(n=7, group=params['group'])
    >>> len(pp['g_list'])
    7
    """
    if n < 0:
        raise FaultyParameterSize(f"witness length must be non-negative, got {n}")

    if g_list is None:
        g_list = [group.random(G1) for _ in range(n)]
    elif len(g_list) != n:
        raise FaultyParameterSize(f"g_list has length {len(g_list)}, expected n={n}")

    if h is None:
        h = group.random(G1)
    if k is None:
        k = group.random(G1)

    logger.debug("Generated public parameters for n=%d", n)

    return {
        'group': group,
        'n': n,
        'g_list': list(g_list),
        'h': h,
        'k': k,
    }


def linear_form_size(n: int) -> int:
    """Size a linear form must have for witnesses of length n."""
    return n + 1
