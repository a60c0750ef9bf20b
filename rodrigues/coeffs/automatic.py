r"""@package rodrigues.coeffs.automatic

Rodrigues coefficients differentiated using hyper-dual numbers.

The closed forms of the coefficients are evaluated on a hyper-dual argument
\f$ \hat t = t + h_1 \epsilon_1 + h_2 \epsilon_2 \f$ (see
rodrigues.hyperdual). The first and second derivatives are then read off the
perturbation components without any truncation error, i.e. the results do
not depend on the step sizes (as long as these don't over- or underflow).

The coefficient value itself is computed from the direct closed form. Note
that the singularity at \f$ t = 0 \f$ is not removed by this, the division by
\f$ \hat t \f$ is carried out as `pow(t_hat, -1)`, so that only the
derivative coefficients are regularized (see hyperdual.pow()).
"""

from ..hyperdual import HyperDual, pow, sin, cos
from .coeffexpr import CoefficientExpression
from .direct import DirectCoeffExpression
from .evaluators import EvaluatorBase


__all__ = [
    "HYPERDUAL_STEP",
    "HyperDualCoeffExpression",
]


## Default perturbation step in both directions.
HYPERDUAL_STEP = 1e-10


# The coefficients as functions of a hyper-dual argument.
_SEEDED = (
    lambda th: cos(th),
    lambda th: sin(th) / th,
    lambda th: (1 - cos(th)) / pow(th, 2),
)


class HyperDualCoeffExpression(CoefficientExpression):
    r"""Coefficient with derivatives computed using hyper-dual numbers."""

    def __init__(self, index, h1=HYPERDUAL_STEP, h2=None, name=None):
        r"""Create the expression for the coefficient \f$ a_i \f$.

        @param index
            Index `i` of the coefficient.
        @param h1,h2
            Perturbation steps. If `h2` is not given, it is taken to be `h1`.
            Neither may be zero.
        @param name
            Name of the expression.
        """
        super(HyperDualCoeffExpression, self).__init__(index=index, name=name)
        self.__h1 = self.__h2 = None
        self.set_steps(h1, h2)

    def set_steps(self, h1, h2=None):
        r"""Change the perturbation steps of future evaluators."""
        if h2 is None:
            h2 = h1
        if h1 == 0 or h2 == 0:
            raise ValueError("Perturbation steps must not be zero.")
        self.__h1 = h1
        self.__h2 = h2

    @property
    def h1(self):
        r"""Step in the first perturbation direction."""
        return self.__h1

    @property
    def h2(self):
        r"""Step in the second perturbation direction."""
        return self.__h2

    def _expr_str(self):
        return "%s, where h1=%r, h2=%r" % (
            ("cos(t_hat)", "sin(t_hat)/t_hat", "(1-cos(t_hat))/t_hat^2")[self.index],
            self.h1, self.h2,
        )

    def _evaluator(self, use_mp):
        return _HyperDualEvaluator(self, use_mp)


class _HyperDualEvaluator(EvaluatorBase):
    r"""Evaluator for HyperDualCoeffExpression.

    The hyper-dual result is computed lazily on the first request of a
    derivative and reused for all derivatives at the same point.
    """

    def __init__(self, expr, use_mp):
        super(_HyperDualEvaluator, self).__init__(expr, use_mp)
        self._h1 = expr.h1
        self._h2 = expr.h2
        self._func = _SEEDED[self.index]
        self._direct = DirectCoeffExpression(self.index, name=expr.name).evaluator(use_mp)
        ## Seeded argument at the current point.
        self._seed = None
        ## Hyper-dual coefficient value at the current point.
        self._result = None

    def _x_changed(self, x):
        self._seed = None
        self._result = None

    def hyperdual(self, x):
        r"""Return the hyper-dual coefficient at `x` (cached)."""
        self.set_x(x)
        return self._hyperdual()

    def _hyperdual(self):
        if self._result is None:
            self._seed = HyperDual.seeded(self._x, self._h1, self._h2)
            self._result = self._func(self._seed)
        return self._result

    def _eval(self, n=0):
        if n == 0:
            return self._direct(self._x)
        res = self._hyperdual()
        th = self._seed
        if n == 1:
            return res.eps1 / th.eps1
        return res.eps1eps2 / (th.eps1 * th.eps2)
