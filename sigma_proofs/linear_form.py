"""
Linear Forms
============

A linear form is a public, fixed functional L(x) = Σ a_i x_i over vectors
of scalars. Prover and verifier evaluate the same form; the protocol only
calls ``eval`` and ``size``. The remaining combinators (``scale``, ``add``,
``split_in_half``, ``pad``) are what the compressed variant uses to fold
the form in half each round.

A form of size m evaluates vectors of length at most m. Shorter vectors
are zero-padded, which is how a size n + 1 form applies to a length n
witness.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from charm.toolbox.pairinggroup import PairingGroup, ZR

from .errors import FaultyParameterSize, VectorLenMismatch, VectorTooShort


class LinearForm(ABC):
    """Interface every concrete linear form implements."""

    @abstractmethod
    def eval(self, x: Sequence[ZR]) -> ZR:
        ...

    @abstractmethod
    def size(self) -> int:
        ...

    @abstractmethod
    def scale(self, scalar: ZR) -> 'LinearForm':
        ...

    @abstractmethod
    def add(self, other: 'LinearForm') -> 'LinearForm':
        ...

    @abstractmethod
    def split_in_half(self) -> Tuple['LinearForm', 'LinearForm']:
        ...

    @abstractmethod
    def pad(self, new_size: int) -> 'LinearForm':
        ...


class CoefficientForm(LinearForm):
    """
    Linear form given by an explicit coefficient vector.

    Parameters
    ----------
    coefficients : Sequence[ZR or int]
        The constants (a_0, ..., a_{m-1}); ints are lifted into ZR
    group : PairingGroup
        The pairing group whose scalar field the form lives in

    Examples
    --------
    >>> L = CoefficientForm([1, 2, 3, 0], group)
    >>> L.eval([group.init(ZR, 1), group.init(ZR, 1)]) == group.init(ZR, 3)
    True
    """

    def __init__(self, coefficients: Sequence, group: PairingGroup):
        self.group = group
        self.coefficients = tuple(
            c if not isinstance(c, int) else group.init(ZR, c) for c in coefficients
        )

    def eval(self, x: Sequence[ZR]) -> ZR:
        if len(x) > len(self.coefficients):
            raise VectorLenMismatch(
                f"vector of length {len(x)} exceeds linear form size {len(self.coefficients)}")

        result = self.group.init(ZR, 0)
        for a_i, x_i in zip(self.coefficients, x):
            result += a_i * x_i
        return result

    def size(self) -> int:
        return len(self.coefficients)

    def scale(self, scalar: ZR) -> 'CoefficientForm':
        return CoefficientForm([a_i * scalar for a_i in self.coefficients], self.group)

    def add(self, other: LinearForm) -> 'CoefficientForm':
        if not isinstance(other, CoefficientForm):
            raise TypeError(f"cannot add {type(other).__name__} to CoefficientForm")
        if other.size() != self.size():
            raise VectorLenMismatch(
                f"linear forms must have the same size: {self.size()} != {other.size()}")
        return CoefficientForm(
            [a + b for a, b in zip(self.coefficients, other.coefficients)], self.group)

    def split_in_half(self) -> Tuple['CoefficientForm', 'CoefficientForm']:
        """
        Split into the forms over the first and second halves of the input.

        For x = (x_L, x_R): L(x) = L_left(x_L) + L_right(x_R).
        """
        m = self.size()
        if m < 2:
            raise VectorTooShort(f"cannot split a linear form of size {m}")
        if m % 2 != 0:
            raise VectorLenMismatch(f"cannot split a linear form of odd size {m}")
        half = m // 2
        return (CoefficientForm(self.coefficients[:half], self.group),
                CoefficientForm(self.coefficients[half:], self.group))

    def pad(self, new_size: int) -> 'CoefficientForm':
        if new_size < self.size():
            raise FaultyParameterSize(
                f"cannot pad a linear form of size {self.size()} down to {new_size}")
        zeros: List[ZR] = [self.group.init(ZR, 0)] * (new_size - self.size())
        return CoefficientForm(list(self.coefficients) + zeros, self.group)

    def __eq__(self, other):
        if not isinstance(other, CoefficientForm):
            return NotImplemented
        return self.coefficients == other.coefficients

    def __repr__(self):
        return f"{type(self).__name__}(size={self.size()})"


class SumForm(CoefficientForm):
    """The sum-of-entries functional L(x) = Σ x_i, of the given size."""

    def __init__(self, size: int, group: PairingGroup):
        super().__init__([1] * size, group)
