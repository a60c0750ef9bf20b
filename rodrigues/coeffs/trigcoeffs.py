r"""@package rodrigues.coeffs.trigcoeffs

Selection of a calculation mode for all three Rodrigues coefficients.

The TrigonometricCoeffs bundles the evaluators of \f$ a_0, a_1, a_2 \f$ for
one CalculationMode and offers the values, derivatives and reduced
derivatives \f$ b_i = a_i'/t \f$ by index or by name.


@b Examples

```
    coeffs = TrigonometricCoeffs("series")
    print(coeffs.a2(1e-3), coeffs.b1(1e-3))
    for name, func in coeffs.functions().items():
        print(name, func(0.01))
```
"""

from collections import OrderedDict
from enum import Enum

from .automatic import HyperDualCoeffExpression
from .direct import DirectCoeffExpression
from .series import SeriesCoeffExpression


__all__ = [
    "CalculationMode",
    "coefficient_expression",
    "TrigonometricCoeffs",
]


class CalculationMode(Enum):
    r"""Strategy for computing the coefficients and their derivatives."""
    DIRECT = "direct"
    HYPERDUAL = "hyperdual"
    SERIES = "series"

    @classmethod
    def get(cls, mode):
        r"""Return the mode for a CalculationMode or its string value.

        @raise ValueError for unknown modes.
        """
        if isinstance(mode, cls):
            return mode
        try:
            return cls(mode)
        except ValueError:
            raise ValueError(
                "Unknown calculation mode %r (expected one of %s)."
                % (mode, ", ".join(m.value for m in cls))
            )


_EXPRESSIONS = {
    CalculationMode.DIRECT: DirectCoeffExpression,
    CalculationMode.HYPERDUAL: HyperDualCoeffExpression,
    CalculationMode.SERIES: SeriesCoeffExpression,
}


def coefficient_expression(index, mode, **kw):
    r"""Create the expression for \f$ a_i \f$ in the given mode.

    Any keyword arguments are passed to the expression class, e.g. `h1` and
    `h2` for the hyper-dual mode or `terms` for the series.
    """
    return _EXPRESSIONS[CalculationMode.get(mode)](index, **kw)


class TrigonometricCoeffs(object):
    r"""The three coefficients evaluated in one calculation mode.

    The named accessors `a0, a1, a2, b0, b1, b2` are callables of `t`, so
    they can be passed around as functions, e.g. `map(coeffs.b2, points)`.
    """

    ## Names of the tabulated quantities in their order.
    NAMES = ("a0", "a1", "a2", "b0", "b1", "b2")

    def __init__(self, mode, use_mp=False, **kw):
        r"""Create the evaluators for all coefficients.

        @param mode
            CalculationMode or its string value.
        @param use_mp
            Whether to evaluate using `mpmath`. Arguments are converted to
            `mpf` in this case.
        @param **kw
            Options for the expressions of this mode (see
            coefficient_expression()).
        """
        ## The calculation mode of all coefficients.
        self.mode = CalculationMode.get(mode)
        self.use_mp = use_mp
        ## The coefficient expressions `a_0, a_1, a_2`.
        self.exprs = [coefficient_expression(i, self.mode, **kw)
                      for i in range(3)]
        self._evaluators = [e.evaluator(use_mp) for e in self.exprs]

    def __repr__(self):
        return "<TrigonometricCoeffs(%s)>" % self.mode.value

    def set_steps(self, h1, h2=None):
        r"""Change the perturbation steps of the hyper-dual mode."""
        if self.mode is not CalculationMode.HYPERDUAL:
            raise ValueError("Steps can only be set in hyperdual mode, not %s."
                             % self.mode.value)
        for expr in self.exprs:
            expr.set_steps(h1, h2)
        self._evaluators = [e.evaluator(self.use_mp) for e in self.exprs]

    def evaluator(self, i):
        r"""Evaluator of the coefficient \f$ a_i \f$."""
        return self._evaluators[i]

    def a(self, i, t):
        r"""Coefficient \f$ a_i(t) \f$."""
        return self._evaluators[i](t)

    def d(self, i, t):
        r"""First derivative \f$ a_i'(t) \f$."""
        return self._evaluators[i].diff(t, 1)

    def d2(self, i, t):
        r"""Second derivative \f$ a_i''(t) \f$."""
        return self._evaluators[i].diff(t, 2)

    def b(self, i, t):
        r"""Reduced derivative \f$ b_i(t) = a_i'(t)/t \f$."""
        return self._evaluators[i].b(t)

    def a0(self, t):
        return self.a(0, t)

    def a1(self, t):
        return self.a(1, t)

    def a2(self, t):
        return self.a(2, t)

    def b0(self, t):
        return self.b(0, t)

    def b1(self, t):
        return self.b(1, t)

    def b2(self, t):
        return self.b(2, t)

    def function(self, name):
        r"""Return the callable for a quantity name.

        Besides the names in NAMES, the derivatives can be requested as
        `da0`, `d2a1`, etc.

        @raise ValueError for unknown names.
        """
        for prefix, method in (("d2a", self.d2), ("da", self.d),
                               ("a", self.a), ("b", self.b)):
            if name.startswith(prefix):
                index = name[len(prefix):]
                if index in ("0", "1", "2"):
                    i = int(index)
                    return lambda t: method(i, t)
                break
        raise ValueError("Unknown coefficient name %r." % (name,))

    def functions(self, names=None):
        r"""Return an ordered mapping of names to callables of `t`.

        @param names
            Iterable of names to include (see function()). Default is NAMES.
        """
        if names is None:
            names = self.NAMES
        return OrderedDict((name, self.function(name)) for name in names)
