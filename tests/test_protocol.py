"""
Test Suite for the Sigma Protocol
=================================

Positive (proof accepted) and negative (proof or parameters rejected) cases
for prove and verify:

1. Completeness for honest provers
2. Determinism under seeded randomness, freshness under group randomness
3. Sizing checks and their order
4. Tamper sensitivity of every proof field
5. Soundness against a prover who does not know the opening
"""

import dataclasses
import logging

import pytest
from charm.toolbox.pairinggroup import ZR, G1

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from sigma_proofs.config import config
from sigma_proofs.groups import setup, scalar_byte_length
from sigma_proofs.params import keygen_params, linear_form_size
from sigma_proofs.linear_form import CoefficientForm, SumForm
from sigma_proofs.commit import commit_vector, make_statement
from sigma_proofs.randomness import SeededRandomness
from sigma_proofs.errors import FaultyParameterSize, InvalidResponse, NotPowerOfTwo, VectorLenMismatch
from sigma_proofs.protocol import Proof, Witness, is_valid, prove, prove_statement, verify


# Fixtures for common setup
@pytest.fixture(scope="module")
def group():
    """Initialize pairing group."""
    return setup('BN254')['group']


@pytest.fixture(scope="module")
def params3(group):
    """Public parameters for n=3 (linear form size 4)."""
    return keygen_params(n=3, group=group)


@pytest.fixture(scope="module")
def params7(group):
    """Public parameters for n=7 (linear form size 8)."""
    return keygen_params(n=7, group=group)


@pytest.fixture(scope="module")
def honest3(group, params3):
    """One honest n=3 instance (L, P, y, proof)."""
    L = SumForm(4, group)
    witness, P, y = _random_instance(group, params3, L)
    return L, P, y, prove(witness, L, params3)


def _zr(group, values):
    return [group.init(ZR, v) for v in values]


def _random_instance(group, params, linear_form):
    witness = Witness(x=[group.random(ZR) for _ in range(params['n'])], gamma=group.random(ZR))
    P, y = make_statement(witness, linear_form, params)
    return witness, P, y


# ============================================================================
# Completeness
# ============================================================================

def test_example_sum_of_entries_accepts(group, params3):
    """n=3, L = sum of entries, x = [2, 5, 9] gives y = 16 and an accepted proof."""
    L = SumForm(4, group)
    witness = Witness(x=_zr(group, [2, 5, 9]), gamma=group.init(ZR, 1234567))

    P, y = make_statement(witness, L, params3)
    assert y == group.init(ZR, 16)
    assert P == commit_vector(witness.x, witness.gamma, params3)

    proof = prove(witness, L, params3)
    verify(proof, L, P, y, params3)


def test_example_wrong_evaluation_rejected(group, params3):
    """Claiming y = 17 for x = [2, 5, 9] fails the linear relation."""
    L = SumForm(4, group)
    witness = Witness(x=_zr(group, [2, 5, 9]), gamma=group.init(ZR, 1234567))
    P, _ = make_statement(witness, L, params3)

    proof = prove(witness, L, params3)

    with pytest.raises(InvalidResponse, match="linear relation"):
        verify(proof, L, P, group.init(ZR, 17), params3)


def test_random_coefficient_form_accepts(group, params7):
    L = CoefficientForm([group.random(ZR) for _ in range(8)], group)
    witness, P, y = _random_instance(group, params7, L)

    proof = prove(witness, L, params7)

    verify(proof, L, P, y, params7)
    assert is_valid(proof, L, P, y, params7)


def test_prove_statement_wrapper(group, params3):
    L = SumForm(4, group)
    x = _zr(group, [1, 1, 1])
    gamma = group.random(ZR)

    proof, P, y = prove_statement(x, gamma, L, params3)

    assert y == group.init(ZR, 3)
    verify(proof, L, P, y, params3)


# ============================================================================
# Randomness
# ============================================================================

def test_same_seed_gives_identical_proofs(group, params3):
    L = SumForm(4, group)
    witness, _, _ = _random_instance(group, params3, L)

    proof_a = prove(witness, L, params3, rng=SeededRandomness(group, seed=42))
    proof_b = prove(witness, L, params3, rng=SeededRandomness(group, seed=42))

    assert proof_a.t == proof_b.t
    assert proof_a.A_hat == proof_b.A_hat
    assert proof_a.z == proof_b.z
    assert proof_a.phi == proof_b.phi


def test_fresh_randomness_gives_different_valid_proofs(group, params3):
    L = SumForm(4, group)
    witness, P, y = _random_instance(group, params3, L)

    proof_a = prove(witness, L, params3, rng=SeededRandomness(group, seed=1))
    proof_b = prove(witness, L, params3)

    assert proof_a.A_hat != proof_b.A_hat
    assert proof_a.z != proof_b.z
    assert proof_a.phi != proof_b.phi
    verify(proof_a, L, P, y, params3)
    verify(proof_b, L, P, y, params3)


# ============================================================================
# Sizing checks
# ============================================================================

@pytest.mark.parametrize("n", [0, 1, 3, 7])
def test_valid_sizes_accept(group, n):
    params = keygen_params(n=n, group=group)
    L = SumForm(linear_form_size(n), group)
    witness, P, y = _random_instance(group, params, L)

    proof = prove(witness, L, params)

    assert len(proof.z) == n
    verify(proof, L, P, y, params)


@pytest.mark.parametrize("n", [4, 8])
def test_invalid_sizes_rejected(group, n):
    params = keygen_params(n=n, group=group)
    L = SumForm(linear_form_size(n), group)
    witness = Witness(x=[group.random(ZR) for _ in range(n)], gamma=group.random(ZR))

    with pytest.raises(NotPowerOfTwo):
        prove(witness, L, params)

    proof = Proof(t=group.random(ZR), A_hat=params['h'],
                  z=[group.random(ZR) for _ in range(n)], phi=group.random(ZR))
    with pytest.raises(NotPowerOfTwo):
        verify(proof, L, params['h'], group.random(ZR), params)


def test_linear_form_size_not_power_of_two(group, params3):
    L = SumForm(3, group)
    witness = Witness(x=_zr(group, [1, 2, 3]), gamma=group.random(ZR))

    with pytest.raises(NotPowerOfTwo):
        prove(witness, L, params3)


def test_linear_form_size_mismatch(group, params3):
    L = SumForm(8, group)
    witness = Witness(x=_zr(group, [1, 2, 3]), gamma=group.random(ZR))

    with pytest.raises(VectorLenMismatch):
        prove(witness, L, params3)


def test_witness_length_mismatch(group, params3):
    L = SumForm(4, group)
    witness = Witness(x=_zr(group, [1, 2]), gamma=group.random(ZR))

    with pytest.raises(VectorLenMismatch):
        prove(witness, L, params3)


def test_power_of_two_check_runs_first(group, params3):
    """A short witness and a size-3 form: the power-of-two error wins."""
    L = SumForm(3, group)
    witness = Witness(x=_zr(group, [1, 2]), gamma=group.random(ZR))

    with pytest.raises(NotPowerOfTwo):
        prove(witness, L, params3)


def test_response_length_mismatch(group, params3):
    L = SumForm(4, group)
    witness, P, y = _random_instance(group, params3, L)
    proof = prove(witness, L, params3)

    short = dataclasses.replace(proof, z=proof.z[:2])

    with pytest.raises(VectorLenMismatch):
        verify(short, L, P, y, params3)


def test_verify_linear_form_size_not_power_of_two(group, params3, honest3):
    _, P, y, proof = honest3

    with pytest.raises(NotPowerOfTwo):
        verify(proof, SumForm(3, group), P, y, params3)


def test_verify_linear_form_size_mismatch(group, params3, honest3):
    _, P, y, proof = honest3

    with pytest.raises(VectorLenMismatch):
        verify(proof, SumForm(8, group), P, y, params3)


def test_verify_power_of_two_check_before_response_length(group, params3, honest3):
    """A short response and a size-3 form: the power-of-two error wins."""
    _, P, y, proof = honest3
    short = dataclasses.replace(proof, z=proof.z[:2])

    with pytest.raises(NotPowerOfTwo):
        verify(short, SumForm(3, group), P, y, params3)


def test_verify_form_size_check_before_response_length(group, params3, honest3):
    _, P, y, proof = honest3
    short = dataclasses.replace(proof, z=proof.z[:2])

    with pytest.raises(VectorLenMismatch, match="linear form size"):
        verify(short, SumForm(8, group), P, y, params3)


def test_narrow_challenge_width_rejected(group, params3, honest3, monkeypatch):
    """Challenges narrower than a scalar would let c0 be guessed."""
    L, P, y, proof = honest3

    for width in (0, 1, scalar_byte_length(group) - 1):
        monkeypatch.setattr(config, 'challenge_bytes', width)
        with pytest.raises(FaultyParameterSize):
            verify(proof, L, P, y, params3)
        with pytest.raises(FaultyParameterSize):
            prove(Witness(x=_zr(group, [1, 2, 3]), gamma=group.random(ZR)), L, params3)


# ============================================================================
# Tamper sensitivity
# ============================================================================

BIT_POSITIONS = [0, 1, 7, 64, 128, 200, 252]


def _flip_bit(group, s, bit):
    return group.init(ZR, int(s) ^ (1 << bit))


@pytest.mark.parametrize("bit", BIT_POSITIONS)
def test_tampered_t_rejected(group, params3, honest3, bit):
    L, P, y, proof = honest3

    tampered = dataclasses.replace(proof, t=_flip_bit(group, proof.t, bit))

    with pytest.raises(InvalidResponse):
        verify(tampered, L, P, y, params3)


def test_tampered_A_hat_rejected(group, params3, honest3):
    L, P, y, proof = honest3

    tampered = dataclasses.replace(proof, A_hat=proof.A_hat * params3['g_list'][0])

    with pytest.raises(InvalidResponse):
        verify(tampered, L, P, y, params3)


def test_identity_A_hat_rejected(group, params3, honest3):
    L, P, y, proof = honest3

    tampered = dataclasses.replace(proof, A_hat=group.init(G1, 1))

    with pytest.raises(InvalidResponse, match="identity"):
        verify(tampered, L, P, y, params3)


def test_identity_commitment_rejected(group, params3, honest3):
    L, _, y, proof = honest3

    with pytest.raises(InvalidResponse, match="identity"):
        verify(proof, L, group.init(G1, 1), y, params3)


@pytest.mark.parametrize("index", [0, 1, 2])
@pytest.mark.parametrize("bit", BIT_POSITIONS)
def test_tampered_z_rejected(group, params3, honest3, index, bit):
    L, P, y, proof = honest3

    z = list(proof.z)
    z[index] = _flip_bit(group, z[index], bit)
    tampered = dataclasses.replace(proof, z=z)

    with pytest.raises(InvalidResponse):
        verify(tampered, L, P, y, params3)


@pytest.mark.parametrize("bit", BIT_POSITIONS)
def test_tampered_phi_rejected(group, params3, honest3, bit):
    L, P, y, proof = honest3

    tampered = dataclasses.replace(proof, phi=_flip_bit(group, proof.phi, bit))

    with pytest.raises(InvalidResponse, match="group relation"):
        verify(tampered, L, P, y, params3)


def test_wrong_commitment_rejected(group, params3):
    L = SumForm(4, group)
    witness, P, y = _random_instance(group, params3, L)
    proof = prove(witness, L, params3)

    assert not is_valid(proof, L, P * params3['h'], y, params3)


# ============================================================================
# Soundness and domain separation
# ============================================================================

@pytest.mark.parametrize("seed", range(5))
def test_prover_without_opening_rejected(group, params3, seed):
    """A proof for a different witness never verifies against the honest statement."""
    L = SumForm(4, group)
    honest, P, y = _random_instance(group, params3, L)
    faulty = Witness(x=[group.random(ZR) for _ in range(3)], gamma=honest.gamma)

    proof = prove(faulty, L, params3, rng=SeededRandomness(group, seed=seed))

    assert not is_valid(proof, L, P, y, params3)


def test_same_evaluation_different_opening_rejected(group, params3):
    """Right y but a commitment to other values: the group relation catches it."""
    L = SumForm(4, group)
    honest = Witness(x=_zr(group, [2, 5, 9]), gamma=group.random(ZR))
    P, y = make_statement(honest, L, params3)
    faulty = Witness(x=_zr(group, [9, 5, 2]), gamma=honest.gamma)

    proof = prove(faulty, L, params3)

    with pytest.raises(InvalidResponse, match="group relation"):
        verify(proof, L, P, y, params3)


def test_transcript_label_mismatch_rejected(group, params3, monkeypatch):
    L = SumForm(4, group)
    witness, P, y = _random_instance(group, params3, L)
    proof = prove(witness, L, params3)

    monkeypatch.setattr(config, 'transcript_label', 'some-other-protocol')

    with pytest.raises(InvalidResponse):
        verify(proof, L, P, y, params3)


def test_rejection_is_logged(group, params3, caplog):
    L = SumForm(4, group)
    witness, P, y = _random_instance(group, params3, L)
    proof = prove(witness, L, params3)

    caplog.set_level(logging.INFO, logger="sigma_proofs.protocol")
    assert not is_valid(proof, L, P, y + group.init(ZR, 1), params3)
    assert "linear relation" in caplog.text
