r"""@package rodrigues.numutils

Numerical helpers shared by the hyper-dual number type and the coefficient
evaluators.


@b Examples

```
    >>> inv_factorials(4)
    (1.0, 1.0, 0.5, 0.16666666666666666)
    >>> float(math_context(use_mp=False).asin(1.0))
    1.5707963267948966
```
"""

import numpy as np
import sympy as sp
from mpmath import mp


__all__ = [
    "NumpyContext",
    "math_context",
    "is_mp_number",
    "inv_factorials",
]


class NumpyContext(object):
    r"""Elementary functions on NumPy floating point scalars.

    The function names are the ones of the `mpmath.mp` context, so code can
    switch between the two by choosing the context object only (see
    math_context()).

    In contrast to `math` or `mpmath.fp`, NumPy follows IEEE semantics:
    division by zero, `log(0)` or `asin(2)` produce `inf` or `nan` together
    with a `RuntimeWarning` instead of raising. NumPy also preserves the
    precision of its scalar types, e.g. `numpy.float32` stays single
    precision.
    """
    pi = np.pi
    exp = staticmethod(np.exp)
    log = staticmethod(np.log)
    sin = staticmethod(np.sin)
    cos = staticmethod(np.cos)
    tan = staticmethod(np.tan)
    asin = staticmethod(np.arcsin)
    acos = staticmethod(np.arccos)
    atan = staticmethod(np.arctan)
    sqrt = staticmethod(np.sqrt)
    power = staticmethod(np.power)

    @staticmethod
    def mpf(x):
        r"""Convert `x` to a NumPy float, keeping NumPy floating types."""
        if isinstance(x, np.floating):
            return x
        return np.float64(x)


def math_context(use_mp):
    r"""Return `mpmath.mp` (for `use_mp==True`) or the NumpyContext."""
    return mp if use_mp else NumpyContext


def is_mp_number(x):
    r"""Check whether `x` is an `mpmath` real number."""
    return isinstance(x, mp.mpf)


def inv_factorials(n, use_mp=False):
    r"""Return the inverse factorials 1/0!, 1/1!, ..., 1/(n-1)! as a tuple.

    The values are computed once from the exact `sympy` factorials and cached.
    For `use_mp==False`, the entries are Python floats, which do not change
    the precision of NumPy scalars they get multiplied with. For `use_mp==True`
    they are `mpf` values at the current `mpmath` working precision (a change
    of precision creates a new table).
    """
    return _InvFactorials.table(n, use_mp)


class _InvFactorials():
    r"""Helper class to cache the inverse factorial tables.

    Tables are only ever extended, never modified, so a returned tuple stays
    valid for the whole process.
    """

    __tables = dict()

    @classmethod
    def table(cls, n, use_mp):
        r"""Generate and cache the results for inv_factorials()."""
        key = mp.prec if use_mp else None
        values = cls.__tables.get(key, ())
        if len(values) < n:
            one = mp.mpf(1) if use_mp else 1.0
            values = tuple(one / int(sp.factorial(k)) for k in range(n))
            cls.__tables[key] = values
        return values[:n]
