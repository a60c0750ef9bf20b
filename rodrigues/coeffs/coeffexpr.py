r"""@package rodrigues.coeffs.coeffexpr

Base of the coefficient expression system.

Each of the trigonometric coefficients \f$ a_0, a_1, a_2 \f$ of the Rodrigues
formula is represented by an expression object, one class per calculation
strategy. The definition and configuration of an expression (e.g. the series
truncation or the hyper-dual step sizes) is decoupled from the so-called
*evaluator* objects that do the actual computation. An evaluator is a
snapshot of the expression's state at the time it was created and is set up
for either fast floating point or slower `mpmath` arbitrary precision
computations.

~~~.py
expr = SeriesCoeffExpression(2)
ev = expr.evaluator()
print("a2(0.1) =", ev(0.1), " a2'(0.1) =", ev.diff(0.1, 1))
~~~
"""

from abc import ABCMeta, abstractmethod

from ..numutils import math_context


__all__ = [
    "CoefficientExpression",
]


class CoefficientExpression(metaclass=ABCMeta):
    """Parent class for coefficient expressions.

    The expression objects cannot be numerically evaluated by themselves.
    Instead, they can be used to create 'evaluators' for the current parameter
    values.

    The methods a child has to override are:
        * _expr_str() returning a representation of the expression and its
          settings
        * _evaluator() creating callable evaluator objects
    """

    def __init__(self, index, name=None):
        r"""Base class init for coefficient expressions.

        Args:
            index: (int)
                Index `i` of the coefficient \f$ a_i \f$. Must be 0, 1 or 2.
            name: (string, optional)
                Name for the expression. By default, ``'a<index>'`` is used.
        """
        if index not in (0, 1, 2):
            raise ValueError("Coefficient index must be 0, 1 or 2, got %r." % (index,))
        self.__index = index
        self.__name = name if name else "a%d" % index
        ## Whether evaluators should adhere to the requested evaluation mode
        ## or override it.
        self._force_evaluation_mode = None

    @property
    def index(self):
        r"""Index `i` of the represented coefficient \f$ a_i \f$."""
        return self.__index

    @property
    def name(self):
        r"""Name given to this instance of the expression."""
        return self.__name
    @name.setter
    def name(self, name):
        self.__name = name

    @property
    def nice_name(self):
        r"""Name used when printing tables and log messages.

        Subclasses may override this to include parameter values.
        """
        return self.name

    def __repr__(self):
        r"""Return a string representing the expression and its settings."""
        cls = self.__class__.__name__
        return "<%s%s>" % (cls, self.str())

    def str(self):
        """Return the expression and any values of local parameters as a string."""
        return "(%s)" % self._expr_str()

    def force_evaluation_mode(self, use_mp):
        r"""Override the evaluation mode of future evaluators.

        Args:
            use_mp: (``{None, True, False}``)
                If `None`, don't override the evaluation mode and create
                evaluators with the requested mode. If `True` or `False`,
                ignore the requested evaluation mode when creating an
                evaluator and use the value set here.
        """
        self._force_evaluation_mode = use_mp

    def evaluator(self, use_mp=False):
        r"""Create an evaluator for the expression in the current state.

        Args:
            use_mp: Boolean indicating whether the evaluator should use
                `mpmath` math operations or standard (and faster) floating
                point operations. This may be ignored if
                force_evaluation_mode() has been used to override this setting.
        """
        if self._force_evaluation_mode is not None:
            use_mp = self._force_evaluation_mode
        return self._evaluator(use_mp=use_mp)

    @abstractmethod
    def _expr_str(self):
        """String representing the expression with any parameter values.

        For example:

            "sin(t)/t, where h1=1e-10, h2=1e-10"
        """
        pass

    @abstractmethod
    def _evaluator(self, use_mp):
        r"""Child classes need to implement this and create their evaluator here."""
        pass

    @classmethod
    def mpmath_context(cls, use_mp):
        r"""Return the `mpmath.mp` or numutils.NumpyContext contexts.

        Both provide the elementary functions under the same names, so
        evaluators can be written once for both evaluation modes.
        """
        return math_context(use_mp)
