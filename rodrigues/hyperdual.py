r"""@package rodrigues.hyperdual

Hyper-dual numbers for exact first and second derivatives.

A hyper-dual number
\f[
    \hat x = x + x_1 \epsilon_1 + x_2 \epsilon_2 + x_{12} \epsilon_1\epsilon_2
\f]
extends the reals by two nilpotent units with
\f$ \epsilon_1^2 = \epsilon_2^2 = 0 \f$ but
\f$ \epsilon_1\epsilon_2 \neq 0 \f$. Any (twice differentiable) function
applied to such a number gives
\f[
    f(\hat x) = f(x) + x_1 f'(x) \epsilon_1 + x_2 f'(x) \epsilon_2
        + \big(x_{12} f'(x) + x_1 x_2 f''(x)\big) \epsilon_1\epsilon_2,
\f]
so first and second derivatives are carried along with the function value.
Since no differences of nearby function values are taken, there is no
subtractive cancellation and the step sizes can be made arbitrarily small.

The HyperDual class implements the arithmetic operators and comparisons, the
module level functions pow(), exp(), log(), sin(), cos(), tan(), asin(),
acos(), atan(), sqrt(), fabs(), max() and min() implement the elementary
functions. Comparisons (and hence fabs(), max(), min()) only look at the
primal value.

The components may be NumPy floating point scalars or `mpmath` numbers. In
the latter case, all functions are evaluated using `mpmath.mp`. Plain Python
numbers are stored as `numpy.float64`.


@b Seeding convention

To obtain \f$ f'(x) \f$ and \f$ f''(x) \f$, evaluate `f` on
``HyperDual(x, h1, h2, 0)`` and divide out the steps:

    f'(x)  = result.eps1 / h1   (or result.eps2 / h2)
    f''(x) = result.eps1eps2 / (h1*h2)

The steps may differ, but the mixed coefficient then has to be divided by the
product ``h1*h2``. Dividing by e.g. ``h1**2`` silently gives a wrong second
derivative while the first derivative stays correct. The derivatives()
function implements this convention.


@b Singularity of pow()

pow() evaluates its derivative coefficients at ``+-POW_TOLERANCE`` instead of
at the primal value if the latter is smaller in magnitude than
``POW_TOLERANCE``. The returned primal value is always computed from the true
argument. Division by a hyper-dual number is implemented via
``pow(divisor, -1)`` and therefore subject to the same rule. Apart from that,
no floating point problems are guarded against: zero divisors, logarithms of
non-positive numbers etc. produce `inf`/`nan` (NumPy emits its usual
`RuntimeWarning`) or whatever `mpmath` does for `mpf` components.


@b Examples

```
    >>> x = HyperDual(0.5, 1e-10, 1e-10, 0)
    >>> r = sin(x) / x
    >>> r.value                      # sin(0.5)/0.5
    >>> r.eps1 / 1e-10               # first derivative
    >>> r.eps1eps2 / 1e-20           # second derivative
    >>> f, df, ddf = derivatives(lambda x: pow(x, 3), 2.0)  # 8, 12, 12
```
"""

import numbers

import numpy as np
from mpmath import mp

from .numutils import math_context, is_mp_number


__all__ = [
    "POW_TOLERANCE",
    "HyperDual",
    "derivatives",
    "pow",
    "exp",
    "log",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "sqrt",
    "fabs",
    "max",
    "min",
]


## Magnitude below which pow() evaluates its derivative coefficients at
## +-POW_TOLERANCE instead of at the primal value.
POW_TOLERANCE = 1e-15


def _is_real(x):
    r"""Return whether `x` can be used as (or promoted to) a component."""
    return (isinstance(x, (numbers.Real, np.floating, np.integer))
            or is_mp_number(x))


def _to_real(x):
    r"""Convert a scalar to a supported real type.

    `mpmath` numbers and NumPy floating scalars are kept as they are, all
    other real numbers become `numpy.float64`.
    """
    if is_mp_number(x) or isinstance(x, np.floating):
        return x
    if not _is_real(x):
        raise TypeError("HyperDual components must be real numbers, got %r."
                        % (x,))
    return np.float64(x)


def _real_or_nan(x):
    r"""Replace a complex `mpmath` result by `nan`.

    Outside their real domain, `mpmath` functions return `mpc` values where
    NumPy returns `nan`. Complex values with zero imaginary part are reduced
    to their real part.
    """
    if isinstance(x, mp.mpc):
        return x.real if x.imag == 0 else mp.nan
    return x


def _ctx(x):
    r"""Context providing the elementary functions for the type of `x`."""
    return math_context(is_mp_number(x))


class HyperDual(object):
    r"""Hyper-dual number with value, two perturbations and mixed coefficient.

    Objects are immutable. Compound assignments such as ``x += y`` rebind `x`
    to ``x + y`` and never modify the object `x` referred to before.

    Real scalars (Python numbers, NumPy scalars, `mpmath` numbers) may be used
    on either side of all arithmetic and comparison operators. They are
    promoted to constants (zero perturbations) of this number's real type
    before the operation is carried out.
    """

    __slots__ = ("_f0", "_f1", "_f2", "_f12")

    # Let NumPy scalars defer to the reflected operators below instead of
    # trying to build object arrays.
    __array_ufunc__ = None

    def __init__(self, *components):
        r"""Create a hyper-dual number.

        Can be called as:

            HyperDual()                          # zero
            HyperDual(value)                     # constant
            HyperDual(value, eps1, eps2, eps1eps2)

        All components are converted to the real type of `value` (see the
        module description).

        @param *components
            None, one or four real numbers.
        """
        if not components:
            components = (0.0,)
        if len(components) not in (1, 4):
            raise TypeError("HyperDual() takes 0, 1 or 4 components (%d given)"
                            % len(components))
        f0 = _to_real(components[0])
        real = type(f0)
        if len(components) == 1:
            components = (f0, 0, 0, 0)
        f1, f2, f12 = [c if isinstance(c, real) else real(_to_real(c))
                       for c in components[1:]]
        self._f0 = f0
        self._f1 = f1
        self._f2 = f2
        self._f12 = f12

    @classmethod
    def seeded(cls, x, h1, h2=None):
        r"""Create ``HyperDual(x, h1, h2, 0)`` for computing derivatives at `x`.

        @param x
            Point at which derivatives should be computed.
        @param h1
            Step in the first perturbation direction. Must not be zero.
        @param h2
            Step in the second perturbation direction. Defaults to `h1`.
        """
        if h2 is None:
            h2 = h1
        if h1 == 0 or h2 == 0:
            raise ValueError("Perturbation steps must not be zero.")
        return cls(x, h1, h2, 0)

    @property
    def value(self):
        r"""Primal value."""
        return self._f0

    @property
    def eps1(self):
        r"""Coefficient of the first perturbation \f$ \epsilon_1 \f$."""
        return self._f1

    @property
    def eps2(self):
        r"""Coefficient of the second perturbation \f$ \epsilon_2 \f$."""
        return self._f2

    @property
    def eps1eps2(self):
        r"""Mixed coefficient of \f$ \epsilon_1\epsilon_2 \f$."""
        return self._f12

    @property
    def components(self):
        r"""Tuple ``(value, eps1, eps2, eps1eps2)``."""
        return (self._f0, self._f1, self._f2, self._f12)

    def _real(self, x):
        r"""Convert a real scalar to the real type of this number."""
        real = type(self._f0)
        if isinstance(x, real):
            return x
        return real(_to_real(x))

    def _promote(self, other):
        r"""Return `other` as hyper-dual number or `None` if unsupported."""
        if isinstance(other, HyperDual):
            return other
        if _is_real(other):
            return HyperDual(self._real(other))
        return None

    def view(self):
        r"""Print all four components in a readable form."""
        print("%g  +  %g epsilon1  +  %g epsilon2  +  %g epsilon1 epsilon2"
              % self.components)

    def __str__(self):
        return "(%s , %s , %s , %s)" % self.components

    def __repr__(self):
        return "HyperDual(%s, %s, %s, %s)" % self.components

    def __hash__(self):
        return hash(self._f0)

    def __pos__(self):
        return self

    def __neg__(self):
        return HyperDual(-self._f0, -self._f1, -self._f2, -self._f12)

    def __abs__(self):
        return fabs(self)

    def __add__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return HyperDual(self._f0 + other._f0, self._f1 + other._f1,
                         self._f2 + other._f2, self._f12 + other._f12)

    def __radd__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return other + self

    def __sub__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return HyperDual(self._f0 - other._f0, self._f1 - other._f1,
                         self._f2 - other._f2, self._f12 - other._f12)

    def __rsub__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        a0, a1, a2, a12 = self.components
        b0, b1, b2, b12 = other.components
        return HyperDual(
            a0 * b0,
            a0 * b1 + a1 * b0,
            a0 * b2 + a2 * b0,
            a0 * b12 + a1 * b2 + a2 * b1 + a12 * b0,
        )

    def __rmul__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return other * self

    def __truediv__(self, other):
        r"""Divide by a real number or another hyper-dual number.

        A real divisor scales all components by its reciprocal. A hyper-dual
        divisor `d` is handled as multiplication with ``pow(d, -1)``, which
        means pow()'s tolerance rule applies to the divisor.
        """
        if isinstance(other, HyperDual):
            return self * pow(other, -1)
        if not _is_real(other):
            return NotImplemented
        inv = self._real(1) / self._real(other)
        return HyperDual(self._f0 * inv, self._f1 * inv,
                         self._f2 * inv, self._f12 * inv)

    def __rtruediv__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return other / self

    def __pow__(self, other):
        if not (isinstance(other, HyperDual) or _is_real(other)):
            return NotImplemented
        return pow(self, other)

    def __rpow__(self, other):
        other = self._promote(other)
        if other is None:
            return NotImplemented
        return pow(other, self)

    def _primal(self, other):
        r"""Primal value of `other` after promotion (or `None`)."""
        other = self._promote(other)
        return None if other is None else other._f0

    def __eq__(self, other):
        other = self._primal(other)
        if other is None:
            return NotImplemented
        return bool(self._f0 == other)

    def __ne__(self, other):
        other = self._primal(other)
        if other is None:
            return NotImplemented
        return bool(self._f0 != other)

    def __lt__(self, other):
        other = self._primal(other)
        if other is None:
            return NotImplemented
        return bool(self._f0 < other)

    def __le__(self, other):
        other = self._primal(other)
        if other is None:
            return NotImplemented
        return bool(self._f0 <= other)

    def __gt__(self, other):
        other = self._primal(other)
        if other is None:
            return NotImplemented
        return bool(self._f0 > other)

    def __ge__(self, other):
        other = self._primal(other)
        if other is None:
            return NotImplemented
        return bool(self._f0 >= other)


def derivatives(func, x, h1=1e-10, h2=None):
    r"""Compute a function's value and first two derivatives at a point.

    The function is evaluated on ``HyperDual.seeded(x, h1, h2)`` and the
    derivatives are extracted following the seeding convention described in
    the module documentation.

    @param func
        Callable taking and returning a HyperDual. A returned real number is
        interpreted as a constant.
    @param x
        Point to evaluate at.
    @param h1,h2
        Perturbation steps. `h2` defaults to `h1`.

    @return A tuple ``(f(x), f'(x), f''(x))``.
    """
    x = HyperDual.seeded(x, h1, h2)
    res = func(x)
    if not isinstance(res, HyperDual):
        if not _is_real(res):
            raise TypeError("Function returned unsupported type %s."
                            % type(res).__name__)
        res = x._promote(res)
    return res.value, res.eps1 / x.eps1, res.eps1eps2 / (x.eps1 * x.eps2)


def _chain(x, f, df, ddf):
    r"""Apply a function to `x` given its value and derivatives at `x.value`."""
    f, df, ddf = _real_or_nan(f), _real_or_nan(df), _real_or_nan(ddf)
    return HyperDual(f, df * x._f1, df * x._f2,
                     df * x._f12 + ddf * x._f1 * x._f2)


def _pair(x1, x2):
    r"""Promote the real one of two arguments to a hyper-dual constant."""
    if isinstance(x1, HyperDual):
        y = x1._promote(x2)
        if y is not None:
            return x1, y
    elif isinstance(x2, HyperDual):
        y = x2._promote(x1)
        if y is not None:
            return y, x2
    raise TypeError("Expected a HyperDual and a real number or two HyperDual "
                    "objects, got %s and %s."
                    % (type(x1).__name__, type(x2).__name__))


def pow(x, a):
    r"""Raise a hyper-dual number to a real or hyper-dual power.

    For a real exponent `a`, the derivative coefficients
    \f$ a x^{a-1} \f$ and \f$ a (a-1) x^{a-2} \f$ are evaluated at
    ``+POW_TOLERANCE`` (for ``x.value >= 0``) or ``-POW_TOLERANCE`` (for
    negative values) in case ``|x.value| < POW_TOLERANCE``. This keeps the
    derivatives finite at ``x.value == 0`` for any exponent while the primal
    value ``x.value**a`` is computed from the unmodified argument.

    For a hyper-dual exponent, the result is ``exp(a * log(x))``. In this
    case `x` may also be a real number.
    """
    if isinstance(a, HyperDual):
        x, a = _pair(x, a)
        return exp(a * log(x))
    if not isinstance(x, HyperDual) or not _is_real(a):
        raise TypeError("Cannot raise %s to a power of type %s."
                        % (type(x).__name__, type(a).__name__))
    ctx = _ctx(x._f0)
    xval = x._f0
    if abs(xval) < POW_TOLERANCE:
        tol = x._real(POW_TOLERANCE)
        xval = tol if xval >= 0 else -tol
    deriv = a * _real_or_nan(ctx.power(xval, a - 1))
    dderiv = _real_or_nan(ctx.power(xval, a - 2))
    return HyperDual(
        _real_or_nan(ctx.power(x._f0, a)),
        x._f1 * deriv,
        x._f2 * deriv,
        x._f12 * deriv + a * (a - 1) * x._f1 * x._f2 * dderiv,
    )


def exp(x):
    r"""Exponential function."""
    e = _ctx(x._f0).exp(x._f0)
    return _chain(x, e, e, e)


def log(x):
    r"""Natural logarithm."""
    x0 = x._f0
    inv = 1 / x0
    return _chain(x, _ctx(x0).log(x0), inv, -inv * inv)


def sin(x):
    r"""Sine function."""
    ctx = _ctx(x._f0)
    s = ctx.sin(x._f0)
    c = ctx.cos(x._f0)
    return _chain(x, s, c, -s)


def cos(x):
    r"""Cosine function."""
    ctx = _ctx(x._f0)
    s = ctx.sin(x._f0)
    c = ctx.cos(x._f0)
    return _chain(x, c, -s, -c)


def tan(x):
    r"""Tangent function."""
    t = _ctx(x._f0).tan(x._f0)
    deriv = t * t + 1
    return _chain(x, t, deriv, 2 * t * deriv)


def asin(x):
    r"""Inverse sine function."""
    ctx = _ctx(x._f0)
    x0 = x._f0
    d = 1 - x0 * x0
    return _chain(x, ctx.asin(x0), 1 / ctx.sqrt(d), x0 * ctx.power(d, -1.5))


def acos(x):
    r"""Inverse cosine function."""
    ctx = _ctx(x._f0)
    x0 = x._f0
    d = 1 - x0 * x0
    return _chain(x, ctx.acos(x0), -1 / ctx.sqrt(d), -x0 * ctx.power(d, -1.5))


def atan(x):
    r"""Inverse tangent function."""
    x0 = x._f0
    d = 1 + x0 * x0
    return _chain(x, _ctx(x0).atan(x0), 1 / d, -2 * x0 / (d * d))


def sqrt(x):
    r"""Square root, computed as ``pow(x, 0.5)``."""
    return pow(x, 0.5)


def fabs(x):
    r"""Absolute value.

    Returns ``-x`` if ``x < 0`` (comparing primal values) and `x` otherwise,
    so at ``x.value == 0`` the derivatives of `x` are returned unchanged.
    """
    return -x if x < 0 else x


def max(x1, x2):
    r"""Return the argument with the larger primal value.

    Implemented as ``x1 if x1 > x2 else x2``, i.e. the second argument is
    returned if the primal values are equal. A real argument is promoted to a
    hyper-dual constant.
    """
    x1, x2 = _pair(x1, x2)
    return x1 if x1 > x2 else x2


def min(x1, x2):
    r"""Return the argument with the smaller primal value.

    Implemented as ``x1 if x1 < x2 else x2``, i.e. the second argument is
    returned if the primal values are equal. A real argument is promoted to a
    hyper-dual constant.
    """
    x1, x2 = _pair(x1, x2)
    return x1 if x1 < x2 else x2
