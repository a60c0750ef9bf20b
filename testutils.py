r"""@package testutils

Shared helpers for the unit tests of the numerical code.

NumericTestCase extends `unittest.TestCase` by assertions for lists of numbers
and for the components of hyper-dual numbers. It optionally prints the time
each test took, controlled by TestSettings.timing.

The decorator slowtest marks tests that are skipped unless
`TestSettings.skipslow` is set to `False` by the script starting the run
(see `tests.py -s`).
"""

import sys
import functools
import unittest
import time


__all__ = [
    "NumericTestCase",
    "TestSettings",
    "slowtest",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


class NumericTestCase(unittest.TestCase):
    """Baseclass for unit tests of numerical code.

    If TestSettings.timing is true, the duration of each test is printed
    (needs `verbosity=2`). Subclasses overriding setUp() or tearDown() don't
    need to call the base implementation.
    """
    @classmethod
    def setUpClass(cls):
        if cls is not NumericTestCase:
            if cls.setUp is not NumericTestCase.setUp:
                setUp = cls.setUp
                @functools.wraps(setUp)
                def setUpWrapper(self, *args, **kwargs):
                    NumericTestCase.setUp(self)
                    return setUp(self, *args, **kwargs)
                cls.setUp = setUpWrapper
            if cls.tearDown is not NumericTestCase.tearDown:
                tearDown = cls.tearDown
                @functools.wraps(tearDown)
                def tearDownWrapper(self, *args, **kwargs):
                    NumericTestCase.tearDown(self)
                    return tearDown(self, *args, **kwargs)
                cls.tearDown = tearDownWrapper

    def run(self, result=None):
        self.__result = result
        return unittest.TestCase.run(self, result)

    def __shouldPrintTiming(self):
        r"""Return whether timing information should be printed."""
        if not TestSettings.timing:
            return False
        if self.__result is None:
            return True
        return not getattr(self.__result, 'dots', True) and getattr(self.__result, 'showAll', False)

    def setUp(self):
        self.startTime = time.time()

    def tearDown(self):
        if self.__shouldPrintTiming():
            duration = time.time() - self.startTime
            print("(%.4f seconds) ... " % (duration), file=sys.stderr, end='')

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two iterables contain (almost) the same values."""
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        a = list(a)
        b = list(b)
        if len(a) != len(b):
            raise self.failureException("Lists have different lengths (%d != %d)" % (len(a), len(b)))
        fails = []
        for i in range(len(a)):
            if a[i] == b[i]:
                continue
            if delta is not None:
                if not abs(a[i]-b[i]) <= delta:
                    fails.append(i)
            elif not round(abs(a[i]-b[i]), places) == 0:
                fails.append(i)
        if fails:
            msg = "%d elements differ:\n" % len(fails)
            msg += "\n".join("  [{}] {} != {}".format(i, a[i], b[i])
                             for i in fails[:9])
            raise self.failureException(msg)

    def assertComponentsEqual(self, x, components):
        r"""Assert the four components of a hyper-dual number exactly."""
        self.assertEqual(len(components), 4)
        self.assertEqual(list(x.components), list(components))

    def assertComponentsAlmostEqual(self, x, components, places=None, delta=None):
        r"""Assert the four components of a hyper-dual number approximately."""
        self.assertListAlmostEqual(x.components, components, places=places, delta=delta)


class TestSettings(object):
    """Global settings for tests."""
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
