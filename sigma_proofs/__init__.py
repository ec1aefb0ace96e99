"""
Sigma Protocol for Linear Form Openings
=======================================

A non-interactive zero-knowledge proof that a Pedersen vector commitment
P = h^γ · ∏ g_i^{x_i} opens to a vector x on which a public linear form L
evaluates to a public y. The protocol is protocol 5 of eprint 2020/152 in
its direct form, made non-interactive with a Fiat-Shamir transcript, and
uses charm-crypto for the group arithmetic.

Modules:
--------
- config: Environment-driven configuration
- groups: Group initialization and setup
- randomness: Injected randomness sources for the prover
- params: Public parameter generation (g_1..g_n, h, k)
- linear_form: LinearForm interface and concrete forms
- commit: Pedersen vector commitment and statement helpers
- fs_oracles: Fiat-Shamir transcript and challenge derivation
- protocol: Witness, Proof, prove and verify
- serialization: Proof encoding
- errors: Error taxonomy
- utils: Multi-exponentiation and canonical encodings

Usage:
------
    from charm.toolbox.pairinggroup import ZR
    from sigma_proofs import setup, keygen_params
    from sigma_proofs.linear_form import SumForm
    from sigma_proofs.protocol import Witness, prove, verify
    from sigma_proofs.commit import make_statement

    # Setup
    group = setup('BN254')['group']
    params = keygen_params(n=3, group=group)
    L = SumForm(4, group)

    # Prove and verify
    witness = Witness(x=[group.init(ZR, v) for v in (2, 5, 9)], gamma=group.random(ZR))
    P, y = make_statement(witness, L, params)
    proof = prove(witness, L, params)
    verify(proof, L, P, y, params)   # raises InvalidResponse on rejection
"""

import logging

__version__ = "0.1.0"

from .config import config
from .groups import setup
from .params import keygen_params

__all__ = ['setup', 'keygen_params', 'configure_logging']


def configure_logging(level=None):
    """Install a basic log handler at ``level`` (default ``config.log_level``)."""
    logging.basicConfig(
        level=level if level is not None else config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
