#!/usr/bin/env python3
r"""@package rodrigues.test_tabulate

Comparison table test suite.
"""

from contextlib import redirect_stdout
import io
import logging
import os.path as op
import shutil
import tempfile
import unittest
import sys

import numpy as np
from mpmath import mp

from testutils import NumericTestCase
from .tabulate import TableSettings, evaluation_points, compute_table
from .tabulate import format_table, main


class TestEvaluationPoints(NumericTestCase):
    r"""Test the evaluation_points() function."""
    def test_defaults(self):
        pts = evaluation_points()
        self.assertEqual(len(pts), 101)
        self.assertIs(pts.dtype.type, np.float64)
        self.assertEqual(pts[50], 0.0)
        self.assertAlmostEqual(pts[0], -0.5, places=15)
        self.assertAlmostEqual(pts[-1], 0.5, places=15)
        self.assertAlmostEqual(pts[51], 0.01, places=15)

    def test_custom(self):
        self.assertListAlmostEqual(evaluation_points(1.0, 4), [-2, -1, 0, 1])
        self.assertListAlmostEqual(evaluation_points(0.5, 3), [-0.5, 0, 0.5])
        pts = evaluation_points(0.1, 5, dtype=np.float32)
        self.assertIs(pts.dtype.type, np.float32)


class TestComputeTable(NumericTestCase):
    r"""Test the compute_table() function."""
    def test_structure(self):
        pts = [-0.1, 0.0, 0.1]
        table = compute_table(pts, ["direct", "hyperdual", "series"])
        self.assertEqual(list(table.keys()), ["direct", "hyperdual", "series"])
        for rows in table.values():
            self.assertEqual(list(rows.keys()), ["a0", "a1", "a2", "b0", "b1", "b2"])
            for values in rows.values():
                self.assertEqual(len(values), 3)
        table = compute_table(pts, "series", names=["a2", "da2"])
        self.assertEqual(list(table.keys()), ["series"])
        self.assertEqual(list(table["series"].keys()), ["a2", "da2"])

    def test_values(self):
        pts = [-0.1, 0.0, 0.1]
        table = compute_table(pts, ["direct", "series"], names=["a1", "b2"])
        self.assertTrue(np.isnan(table["direct"]["a1"][1]))
        self.assertEqual(table["series"]["a1"][1], 1.0)
        self.assertAlmostEqual(table["series"]["b2"][1], -1/12., places=15)
        self.assertAlmostEqual(table["direct"]["a1"][0], table["series"]["a1"][0], places=15)
        self.assertEqual(table["series"]["a1"][0], table["series"]["a1"][2])

    def test_options(self):
        pts = [0.3]
        table1 = compute_table(pts, "hyperdual", names=["da1"])
        table2 = compute_table(pts, "hyperdual", names=["da1"],
                               hyperdual=dict(h1=1e-4, h2=1e-6))
        self.assertAlmostEqual(table1["hyperdual"]["da1"][0],
                               table2["hyperdual"]["da1"][0], places=14)
        with self.assertRaises(ValueError):
            compute_table(pts, "direct", automatic=dict(h1=1e-4))
        with self.assertRaises(ValueError):
            compute_table(pts, "symbolic")

    def test_mpmath(self):
        with mp.workdps(25):
            table = compute_table([0.0, 0.5], ["direct", "hyperdual"],
                                  names=["a1", "da1"], use_mp=True)
            self.assertTrue(mp.isnan(table["direct"]["a1"][0]))
            self.assertIsType(table["direct"]["a1"][1], mp.mpf)
            self.assertLess(abs(table["direct"]["a1"][1] - mp.sin(0.5)/0.5), 1e-24)
            self.assertLess(abs(table["direct"]["da1"][1] - table["hyperdual"]["da1"][1]), 1e-20)


class TestFormatTable(NumericTestCase):
    r"""Test the format_table() function."""
    def test_format(self):
        table = {"direct": {"a1": [1.0, 2.0]}}
        text = format_table([-0.1, 0.0], table)
        line = "-" * 36
        self.assertEqual(text.split("\n"), [
            "   | -1.0000000e-01 |  0.0000000e+00",
            line,
            "a1 |  1.0000000e+00 |  2.0000000e+00",
            line,
        ])

    def test_options(self):
        table = {"series": {"b2": [0.5]}, "direct": {"b2": [float('nan')]}}
        text = format_table([0.25], table, width=8, precision=2, separator=";")
        self.assertEqual(text.split("\n"), [
            "  ;2.50e-01",
            "-" * 11,
            "b2;5.00e-01",
            "-" * 11,
            "b2;     nan",
            "-" * 11,
        ])


class TestTableSettings(NumericTestCase):
    r"""Test the TableSettings class."""
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _write(self, content, name="test.cfg"):
        fname = op.join(self.tmpdir, name)
        with open(fname, "w") as f:
            f.write(content)
        return fname

    def test_defaults(self):
        settings = TableSettings.read(op.join(self.tmpdir, "missing.cfg"))
        self.assertEqual(settings.step, 1e-2)
        self.assertEqual(settings.num_points, 101)
        self.assertEqual(settings.width, 14)
        self.assertEqual(settings.precision, 7)
        self.assertEqual(settings.separator, " | ")
        self.assertEqual(settings.modes, ("direct", "hyperdual", "series"))
        self.assertEqual(settings.h1, 1e-10)
        self.assertIsNone(settings.h2)

    def test_read(self):
        fname = self._write(
            "[table]\n"
            "step = 0.05\n"
            "num_points = 11\n"
            "separator = \" ; \"\n"
            "dtype = float32\n"
            "use_mp = yes\n"
            "modes = series, direct\n"
            "names = a2, b2\n"
            "h2 = 1e-8\n"
        )
        settings = TableSettings.read(fname)
        self.assertEqual(settings.step, 0.05)
        self.assertEqual(settings.num_points, 11)
        self.assertEqual(settings.separator, " ; ")
        self.assertIs(settings.dtype, np.float32)
        self.assertTrue(settings.use_mp)
        self.assertEqual(settings.modes, ("series", "direct"))
        self.assertEqual(settings.names, ("a2", "b2"))
        self.assertEqual(settings.h2, 1e-8)
        self.assertEqual(settings.width, 14)
        self.assertEqual(settings.mode_options(),
                         dict(hyperdual=dict(h1=1e-10, h2=1e-8)))
        # class defaults are unaffected
        self.assertEqual(TableSettings.step, 1e-2)

    def test_invalid(self):
        for content in ("step = small", "dtype = int32", "dtype = bogus",
                        "use_mp = maybe", "modes = direct, symbolic",
                        "names = a0, c1", "colour = red", "names = ,"):
            with self.subTest(content=content):
                fname = self._write("[table]\n%s\n" % content)
                with self.assertRaises(ValueError):
                    TableSettings.read(fname)
        with self.assertRaises(ValueError):
            TableSettings(modes=("automatic",))


class TestMain(NumericTestCase):
    r"""Test the command line entry point."""
    def setUp(self):
        logger = logging.getLogger()
        self.addCleanup(logger.setLevel, logger.level)
        self.tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmpdir)

    def _run(self, *args):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(args))
        return code, out.getvalue()

    def test_full_table(self):
        code, out = self._run()
        self.assertEqual(code, 0)
        lines = out.rstrip("\n").split("\n")
        self.assertEqual(len(lines), 2 + 3*7)
        self.assertEqual(len(lines[0]), 2 + 101*17)
        self.assertTrue(lines[2].startswith("a0 | "))
        self.assertTrue(lines[-2].startswith("b2 | "))
        self.assertEqual(lines[1], lines[-1])

    def test_config_and_timing(self):
        fname = op.join(self.tmpdir, "table.cfg")
        with open(fname, "w") as f:
            f.write("[table]\nnum_points = 3\nstep = 0.1\nmodes = series\nnames = a2\n")
        code, out = self._run("-c", fname, "-t")
        self.assertEqual(code, 0)
        lines = out.rstrip("\n").split("\n")
        self.assertEqual(lines[0], "   | -1.0000000e-01 |  0.0000000e+00 |  1.0000000e-01")
        self.assertEqual(lines[2], "a2 |  4.9958347e-01 |  5.0000000e-01 |  4.9958347e-01")
        self.assertTrue(lines[-1].startswith("Elapsed time: "))

    def test_verbose(self):
        with self.assertLogs(level='INFO') as logs:
            code, out = self._run("-v", "-c", op.join(self.tmpdir, "missing.cfg"))
        self.assertEqual(code, 0)
        self.assertTrue(any("Computing series" in msg for msg in logs.output))
        self.assertTrue(any("Config file not found" in msg for msg in logs.output))

    def test_errors(self):
        with self.assertLogs(level='ERROR'):
            self.assertEqual(self._run("--bogus")[0], 2)
        with self.assertLogs(level='ERROR'):
            self.assertEqual(self._run("-c")[0], 2)
        fname = op.join(self.tmpdir, "bad.cfg")
        with open(fname, "w") as f:
            f.write("[table]\nwidth = wide\n")
        with self.assertLogs(level='ERROR'):
            self.assertEqual(self._run("-c", fname)[0], 2)


def run_tests():
    suite = unittest.TestLoader().loadTestsFromModule(sys.modules[__name__])
    return len(unittest.TextTestRunner(verbosity=2).run(suite).failures)


if __name__ == '__main__':
    unittest.main()
