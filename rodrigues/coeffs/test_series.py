#!/usr/bin/env python3
r"""@package rodrigues.coeffs.test_series

Series coefficient test suite.
"""

import math
import unittest
import sys

import numpy as np
from mpmath import mp

from testutils import NumericTestCase, slowtest
from ..utils import lmap
from .direct import DirectCoeffExpression
from .series import SeriesCoeffExpression, SERIES_THRESHOLD, SERIES_TERMS
from .test_direct import reference


class TestSeries(NumericTestCase):
    r"""Test the SeriesCoeffExpression class."""
    def test_defaults(self):
        expr = SeriesCoeffExpression(1)
        self.assertEqual(expr.terms, SERIES_TERMS)
        self.assertEqual(expr.threshold, SERIES_THRESHOLD)
        self.assertEqual(SERIES_TERMS, 6)
        self.assertEqual(SERIES_THRESHOLD, 0.25)

    def test_values_at_zero(self):
        a1 = SeriesCoeffExpression(1).evaluator()
        a2 = SeriesCoeffExpression(2).evaluator()
        self.assertEqual(a1(0.0), 1.0)
        self.assertEqual(a2(0.0), 0.5)
        self.assertEqual(a1.diff(0.0, 1), 0.0)
        self.assertEqual(a2.diff(0.0, 1), 0.0)
        self.assertAlmostEqual(a1.diff(0.0, 2), -1/3., places=15)
        self.assertAlmostEqual(a2.diff(0.0, 2), -1/12., places=15)
        self.assertAlmostEqual(a1.b(0.0), -1/3., places=15)
        self.assertAlmostEqual(a2.b(0.0), -1/12., places=15)
        b0 = SeriesCoeffExpression(0).evaluator()
        self.assertEqual(b0(0.0), 1.0)
        self.assertEqual(b0.b(0.0), -1.0)

    def test_accuracy(self):
        pts = [-0.25, -0.01, 1e-4, 0.1, 0.2]
        for i in range(3):
            ev = SeriesCoeffExpression(i).evaluator()
            for n in range(3):
                with self.subTest(i=i, n=n):
                    ref = [float(reference(i, n, t)) for t in pts]
                    self.assertListAlmostEqual(lmap(ev.function(n), pts), ref, delta=1e-15)
            with self.subTest(i=i, n='b'):
                ref = [float(reference(i, 'b', t)) for t in pts]
                self.assertListAlmostEqual(lmap(ev.b, pts), ref, delta=1e-15)

    def test_direct_above_threshold(self):
        for i in range(3):
            ev = SeriesCoeffExpression(i).evaluator()
            direct = DirectCoeffExpression(i).evaluator()
            for t in (-0.3, 0.26, 1.5):
                for n in range(3):
                    self.assertEqual(ev.diff(t, n), direct.diff(t, n))
                self.assertEqual(ev.b(t), direct.b(t))

    def test_a0_is_direct(self):
        ev = SeriesCoeffExpression(0).evaluator()
        direct = DirectCoeffExpression(0).evaluator()
        for t in (-0.1, 0.05):
            for n in range(3):
                self.assertEqual(ev.diff(t, n), direct.diff(t, n))
        # b0 = -sin(t)/t from the series
        self.assertAlmostEqual(ev.b(0.1), -math.sin(0.1)/0.1, places=15)

    def test_options(self):
        ev = SeriesCoeffExpression(2, terms=1).evaluator()
        self.assertEqual(ev(0.2), 0.5)
        self.assertEqual(ev.diff(0.2, 2), -1/12.)
        ev = SeriesCoeffExpression(1, threshold=0.0).evaluator()
        direct = DirectCoeffExpression(1).evaluator()
        self.assertEqual(ev(0.1), direct(0.1))
        self.assertEqual(ev(0.0), 1.0)
        with self.assertRaises(ValueError):
            SeriesCoeffExpression(1, terms=0)
        with self.assertRaises(ValueError):
            SeriesCoeffExpression(1, terms=SERIES_TERMS+1)
        with self.assertRaises(ValueError):
            SeriesCoeffExpression(1, threshold=-0.1)
        with self.assertRaises(ValueError):
            SeriesCoeffExpression(-1)

    def test_mpmath(self):
        with mp.workdps(30):
            t = mp.mpf('0.1')
            for i in (1, 2):
                ev = SeriesCoeffExpression(i).evaluator(use_mp=True)
                self.assertIsType(ev(t), mp.mpf)
                for n in range(3):
                    self.assertLess(abs(ev.diff(t, n) - reference(i, n, t)), 1e-18)
                self.assertLess(abs(ev.b(t) - reference(i, 'b', t)), 1e-18)

    def test_precision(self):
        ev = SeriesCoeffExpression(1).evaluator()
        self.assertIsType(ev(np.float32(0.1)), np.float32)
        self.assertIsType(ev.b(np.float32(0.1)), np.float32)
        self.assertAlmostEqual(float(ev(np.float32(0.1))), math.sin(0.1)/0.1, places=6)

    @slowtest
    def test_accuracy_dense(self):
        pts = [k * SERIES_THRESHOLD / 100 for k in range(-100, 101) if k != 0]
        for i in range(3):
            ev = SeriesCoeffExpression(i).evaluator()
            for n in (0, 1, 2, 'b'):
                func = ev.b if n == 'b' else ev.function(n)
                ref = [float(reference(i, n, t)) for t in pts]
                values = lmap(func, pts)
                with self.subTest(i=i, n=n):
                    self.assertListAlmostEqual(values, ref, delta=2e-15)

    def test_repr(self):
        self.assertEqual(
            repr(SeriesCoeffExpression(1)),
            "<SeriesCoeffExpression(sum (-1)^j t^(2j) / (2j+1)!, where terms=6, threshold=0.25)>"
        )


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
