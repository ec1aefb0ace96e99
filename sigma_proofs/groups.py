"""
Group Initialization and Setup
===============================

This module initializes the pairing group whose G1 subgroup carries the
Pedersen vector commitments and whose scalar field ZR carries witnesses,
blindings, challenges and responses.

According to charm-crypto documentation (https://jhuisi.github.io/charm/tutorial.html):
- PairingGroup('BN254') provides a 254-bit Type-3 curve
- Alternative curves: 'MNT224', 'SS512'
- Only G1 and ZR are used by the sigma protocol; no pairing is computed
"""

import logging

from charm.toolbox.pairinggroup import PairingGroup, ZR, G1

from .config import config

logger = logging.getLogger(__name__)

FALLBACK_CURVES = ('BN254', 'MNT224', 'SS512')


def setup(group_name: str = None) -> dict:
    """
    Initialize the pairing group for the sigma protocol.

    Parameters
    ----------
    group_name : str, optional
        The pairing curve identifier. Defaults to ``config.pairing_curve``
        (environment variable ``SIGMA_PAIRING_CURVE``, 'BN254' if unset).

    Returns
    -------
    dict
        A dictionary containing:
        - 'group': The PairingGroup object
        - 'group_name': The name of the curve actually used
        - 'G1': The G1 group type constant
        - 'ZR': The ZR (scalar field) type constant
        - 'order': The group order as a Python int

    Notes
    -----
    If the requested curve cannot be loaded, the remaining curves of
    ``FALLBACK_CURVES`` are tried in order and a warning is logged. If none
    can be loaded the last error is raised.

    Examples
    --------
    >>> params = setup('BN254')
    >>> group = params['group']
    >>> x = group.random(ZR)
    """
    if group_name is None:
        group_name = config.pairing_curve

    candidates = [group_name] + [c for c in FALLBACK_CURVES if c != group_name]
    last_error = None
    for name in candidates:
        try:
            group = PairingGroup(name)
        except Exception as e:
            logger.warning("Curve %s not available (%s), trying next fallback", name, e)
            last_error = e
            continue
        if name != group_name:
            logger.warning("Using fallback curve %s instead of %s", name, group_name)
        return {
            'group': group,
            'group_name': name,
            'G1': G1,
            'ZR': ZR,
            'order': int(group.order()),
        }

    raise last_error


def scalar_byte_length(group: PairingGroup) -> int:
    """Width in bytes of the canonical encoding of a ZR element."""
    return (int(group.order()).bit_length() + 7) // 8
