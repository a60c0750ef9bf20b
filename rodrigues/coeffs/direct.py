r"""@package rodrigues.coeffs.direct

Closed form expressions for the Rodrigues coefficients.

The coefficients and their derivatives are implemented as the plain symbolic
formulas
\f[
    a_0 = \cos t, \qquad
    a_1 = \frac{\sin t}{t}, \qquad
    a_2 = \frac{1 - \cos t}{t^2},
\f]
which all have a removable singularity at \f$ t = 0 \f$ (except for
\f$ a_0 \f$). In floating point arithmetic, the results are `nan` there and
lose accuracy for small \f$ |t| \f$, which is what the other calculation modes
are compared against.
"""

from .coeffexpr import CoefficientExpression
from .evaluators import EvaluatorBase


__all__ = [
    "DirectCoeffExpression",
]


# For each index: (a, a', a'', b) as functions of (t, sin(t), cos(t)).
_TERMS = (
    (
        lambda t, s, c: c,
        lambda t, s, c: -s,
        lambda t, s, c: -c,
        lambda t, s, c: -s / t,
    ),
    (
        lambda t, s, c: s / t,
        lambda t, s, c: (t * c - s) / (t * t),
        lambda t, s, c: -((t * t - 2) * s + 2 * t * c) / t**3,
        lambda t, s, c: (t * c - s) / t**3,
    ),
    (
        lambda t, s, c: (1 - c) / (t * t),
        lambda t, s, c: (t * s + 2 * c - 2) / t**3,
        lambda t, s, c: ((t * t - 6) * c - 4 * t * s + 6) / t**4,
        lambda t, s, c: (t * s + 2 * c - 2) / t**4,
    ),
)


class DirectCoeffExpression(CoefficientExpression):
    r"""Coefficient evaluated using its closed form.

    @b Examples

    ```
        >>> ev = DirectCoeffExpression(1).evaluator()
        >>> float(ev(0.5))
        0.958851077208406
    ```
    """

    def _expr_str(self):
        return ("cos(t)", "sin(t)/t", "(1-cos(t))/t^2")[self.index]

    def _evaluator(self, use_mp):
        return _DirectEvaluator(self, use_mp)


class _DirectEvaluator(EvaluatorBase):
    r"""Evaluator for DirectCoeffExpression.

    Both \f$ \sin t \f$ and \f$ \cos t \f$ are computed once per point and
    shared by the coefficient, its derivatives and the reduced derivative.
    """

    def __init__(self, expr, use_mp):
        super(_DirectEvaluator, self).__init__(expr, use_mp)
        ## Formulas for the value, derivatives and the reduced derivative.
        self._terms = _TERMS[self.index]
        ## Sine at the current point.
        self._sin = None
        ## Cosine at the current point.
        self._cos = None

    def _x_changed(self, x):
        self._sin = self.ctx.sin(x)
        self._cos = self.ctx.cos(x)

    def _eval(self, n=0):
        return self._terms[n](self._x, self._sin, self._cos)

    def _eval_reduced(self):
        return self._terms[3](self._x, self._sin, self._cos)
