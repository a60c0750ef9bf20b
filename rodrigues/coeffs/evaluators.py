r"""@package rodrigues.coeffs.evaluators

Base class for the evaluators of coeffexpr.CoefficientExpression sub classes.
"""

from abc import ABCMeta, abstractmethod


__all__ = [
    "EvaluatorBase",
]


class EvaluatorBase(metaclass=ABCMeta):
    r"""Base class for coefficient evaluators.

    Evaluators are light-weight callable objects created by
    coeffexpr.CoefficientExpression.evaluator(). Calling an evaluator with a
    point `t` computes the coefficient \f$ a_i(t) \f$, diff() computes its
    derivatives and b() the reduced derivative \f$ b_i(t) = a_i'(t)/t \f$.

    Sub classes need to implement only _x_changed() and _eval(). Evaluation
    at a point usually needs interim results (e.g. \f$ \sin t \f$ and
    \f$ \cos t \f$) that are shared by the coefficient and its derivatives.
    This class therefore intercepts all calls to check whether the point has
    changed. If it has, _x_changed() is called and the sub class can recompute
    its interim results. Then, _eval() computes the requested value from the
    cached data using the protected member EvaluatorBase._x.
    """

    ## Highest derivative order evaluators can compute.
    max_order = 2

    def __init__(self, expr, use_mp):
        r"""Base class init for evaluators.

        @param expr
            The expression object for which this evaluator is created.
        @param use_mp
            Whether computations should use `mpmath` (if `True`) or NumPy
            floating point operations.
        """
        ## Index `i` of the coefficient \f$ a_i \f$.
        self.index = expr.index
        ## Name of the evaluated expression.
        self.name = expr.name
        ## Boolean indicating if computation should use `mpmath` (if `True`)
        ## or floating point operations.
        self.use_mp = use_mp
        ## Either `mpmath.mp` or numutils.NumpyContext, depending on `use_mp`.
        self.ctx = expr.mpmath_context(use_mp)
        ## Convenience function that converts scalar values to NumPy floats
        ## or `mp.mpf`, depending on the `use_mp` setting.
        self.converter = self.ctx.mpf
        ## Parameter at which the next evaluation(s) should compute their values.
        self._x = None

    def __call__(self, x):
        r"""Compute the coefficient at a given point x."""
        return self.diff(x, 0)

    def diff(self, x, n=1):
        r"""Evaluate the n'th derivative of the coefficient at a point x.

        The last point the coefficient was evaluated at is stored such that
        interim computations can be cached.
        """
        if not 0 <= n <= self.max_order:
            raise NotImplementedError('Derivative for n = %s not implemented.' % n)
        self.set_x(x)
        return self._eval(n)

    def b(self, x):
        r"""Evaluate the reduced derivative \f$ a_i'(x) / x \f$."""
        self.set_x(x)
        return self._eval_reduced()

    def function(self, n=0):
        r"""Return a callable for the n'th derivative."""
        if not 0 <= n <= self.max_order:
            raise NotImplementedError('Derivative for n = %s not implemented.' % n)
        return lambda x: self.diff(x, n)

    def set_x(self, x):
        r"""Check if x has changed since the last call and trigger an update."""
        x = self.converter(x)
        if self._x is not None and type(x) is type(self._x) and self._x == x:
            return False
        self._x = x
        self._x_changed(x)
        return True

    def _eval_reduced(self):
        r"""Compute the reduced derivative from cached interim results.

        The default divides the first derivative by the current point. Sub
        classes may override this with a formula that avoids the division.
        """
        return self._eval(1) / self._x

    @abstractmethod
    def _x_changed(self, x):
        r"""Triggered to signal evaluation at x is about to happen.

        This is skipped if the previous evaluation was at `x` too, so that sub
        classes can recompute reusable interim results here.
        """
        pass

    @abstractmethod
    def _eval(self, n=0):
        r"""Compute the n'th derivative using previously cached interim results.

        This is only called after _x_changed() has been called for the
        protected variable EvaluatorBase._x, so you can use interim results
        computed in _x_changed() here.
        """
        pass
