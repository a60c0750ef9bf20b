r"""@package rodrigues.coeffs.series

Truncated Taylor series of the Rodrigues coefficients.

All three coefficients are even functions with the expansion
\f[
    a_i(t) = \sum_{j=0}^\infty \frac{(-1)^j}{(2j+i)!} t^{2j}.
\f]
Near \f$ t = 0 \f$, where the closed forms of \f$ a_1, a_2 \f$ suffer from
cancellation, a few terms of this series are evaluated instead. Derivatives
and the reduced derivative \f$ b_i = a_i'/t \f$ are computed from the
term-wise differentiated series, which makes the division by \f$ t \f$
analytic.

Outside of `|t| <= threshold`, the closed forms of the
direct.DirectCoeffExpression are used. Since \f$ a_0 = \cos t \f$ has no
singularity, it and its derivatives always use the closed form. Only the
reduced derivative \f$ b_0 = -\sin t / t \f$ uses the series.


@b Examples

```
    ev = SeriesCoeffExpression(2).evaluator()
    print(ev(0.0), ev.b(0.0))  # 0.5 -0.08333333333333333
```
"""

from ..numutils import inv_factorials
from .coeffexpr import CoefficientExpression
from .direct import DirectCoeffExpression
from .evaluators import EvaluatorBase


__all__ = [
    "SERIES_THRESHOLD",
    "SERIES_TERMS",
    "SeriesCoeffExpression",
]


## Largest `|t|` at which the series is used.
SERIES_THRESHOLD = 0.25

## Number of terms summed in each series.
SERIES_TERMS = 6

## Number of inverse factorials available to the series.
_NUM_FACTORIALS = 15


class SeriesCoeffExpression(CoefficientExpression):
    r"""Coefficient evaluated using its truncated Taylor series near zero."""

    def __init__(self, index, terms=SERIES_TERMS, threshold=SERIES_THRESHOLD,
                 name=None):
        r"""Create a series expression for the coefficient \f$ a_i \f$.

        @param index
            Index `i` of the coefficient.
        @param terms
            Number of non-vanishing terms to sum. The highest term of the
            second derivative needs `1/(2*terms+i)!`, so this must be at most
            `6` (the default).
        @param threshold
            For `|t|` above this value, the closed form is used instead.
        @param name
            Name of the expression.
        """
        super(SeriesCoeffExpression, self).__init__(index=index, name=name)
        if not 1 <= terms <= SERIES_TERMS:
            raise ValueError("Number of terms must be in 1..%d, got %r."
                             % (SERIES_TERMS, terms))
        if not threshold >= 0:
            raise ValueError("Threshold must be non-negative, got %r." % (threshold,))
        self.__terms = terms
        self.__threshold = threshold

    @property
    def terms(self):
        r"""Number of series terms summed per evaluation."""
        return self.__terms

    @property
    def threshold(self):
        r"""Largest `|t|` at which the series is used."""
        return self.__threshold

    def _expr_str(self):
        return ("sum (-1)^j t^(2j) / (2j+%d)!, where terms=%r, threshold=%r"
                % (self.index, self.terms, self.threshold))

    def _evaluator(self, use_mp):
        return _SeriesEvaluator(self, use_mp)


def _falling(m, k):
    r"""Falling factorial m (m-1) ... (m-k+1)."""
    result = 1
    for l in range(k):
        result *= m - l
    return result


class _SeriesEvaluator(EvaluatorBase):
    r"""Evaluator for SeriesCoeffExpression.

    The series coefficients of the value, first and second derivative and the
    reduced derivative are precomputed here. Powers of `t` are computed once
    per point and shared between all of them.
    """

    def __init__(self, expr, use_mp):
        super(_SeriesEvaluator, self).__init__(expr, use_mp)
        i = self.index
        terms = expr.terms
        inv_fac = inv_factorials(_NUM_FACTORIALS, use_mp=use_mp)
        def _series(start, k):
            return [((-1)**j * inv_fac[2*j+i] * _falling(2*j, k), 2*j-k)
                    for j in range(start, start+terms)]
        ## Pairs of `(coefficient, power)` for the value and the derivatives.
        self._series = [_series(0, 0), _series(1, 1), _series(1, 2)]
        ## Pairs of `(coefficient, power)` for the reduced derivative.
        self._reduced = [(c, p-1) for c, p in self._series[1]]
        ## Evaluator of the closed form used away from zero.
        self._direct = DirectCoeffExpression(i, name=expr.name).evaluator(use_mp)
        self._threshold = self.converter(expr.threshold)
        ## Powers of the current point computed so far.
        self._powers = None

    def _x_changed(self, x):
        self._powers = [type(x)(1)]

    def _power(self, p):
        r"""Return the p'th power of the current point (cached)."""
        powers = self._powers
        while len(powers) <= p:
            powers.append(powers[-1] * self._x)
        return powers[p]

    def _use_series(self):
        return abs(self._x) <= self._threshold

    def _sum(self, series):
        result = self._power(0) * 0
        for coeff, p in series:
            result += coeff * self._power(p)
        return result

    def _eval(self, n=0):
        if self.index == 0 or not self._use_series():
            return self._direct.diff(self._x, n)
        return self._sum(self._series[n])

    def _eval_reduced(self):
        if not self._use_series():
            return self._direct.b(self._x)
        return self._sum(self._reduced)
