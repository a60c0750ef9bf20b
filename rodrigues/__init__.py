r"""@package rodrigues

Accuracy comparison of the trigonometric coefficients of the Rodrigues
rotation formula near the singular angle \f$ \theta = 0 \f$.

The coefficients
\f$ a_0 = \cos\theta \f$, \f$ a_1 = \sin\theta / \theta \f$ and
\f$ a_2 = (1-\cos\theta)/\theta^2 \f$ and their reduced derivatives
\f$ b_i = a_i'/\theta \f$ can be computed in the rodrigues.coeffs package
using their closed forms, truncated Taylor series or the closed forms
differentiated with the hyper-dual numbers of the rodrigues.hyperdual module.

The rodrigues.tabulate module prints a table of all quantities in all modes
on a grid of angles around zero.
"""
