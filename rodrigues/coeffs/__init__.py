r"""@package rodrigues.coeffs

Expressions for the trigonometric coefficients of the Rodrigues formula.

Each coefficient \f$ a_i \f$, `i = 0, 1, 2`, is represented by an expression
object for one of the calculation modes:
    * direct.DirectCoeffExpression using the closed forms
    * series.SeriesCoeffExpression using truncated Taylor series near zero
    * automatic.HyperDualCoeffExpression using hyper-dual differentiation

NOTE: Expression objects themselves cannot be evaluated. Instead, you take a
      *snapshot* of the current state and turn it into a callable object, here
      called an *evaluator* and subclasses of evaluators.EvaluatorBase.

Evaluators compute the value, the first and second derivative and the reduced
derivative \f$ b_i = a_i'/t \f$ either using NumPy floating point or `mpmath`
arbitrary precision operations.

The trigcoeffs.TrigonometricCoeffs bundles all three coefficients of one mode.
"""

from .trigcoeffs import CalculationMode, TrigonometricCoeffs
from .trigcoeffs import coefficient_expression
