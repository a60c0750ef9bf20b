r"""@package rodrigues.tabulate

Print a comparison table of the Rodrigues coefficients in all calculation
modes.

The coefficients \f$ a_i \f$ and reduced derivatives \f$ b_i \f$ are evaluated
on a uniform grid of angles around zero, one block of rows per
coeffs.CalculationMode. Comparing the blocks shows where the closed forms
lose accuracy near the singular angle.

The table can be printed from the command line via

    python -m rodrigues [-v] [-t] [-c FILE]

where
    * `-v` (or `-verbose`) enables informational log messages,
    * `-t` (or `--timing`) prints the elapsed time after the table and
    * `-c FILE` reads settings from the `[table]` section of an INI file (see
      the `config.cfg` file for the available keys). This may be given
      multiple times, later files overriding earlier ones.


@b Examples

```
    pts = evaluation_points(step=0.1, num=5)
    table = compute_table(pts, ["direct", "series"], names=["a2", "b2"])
    print(format_table(pts, table))
```
"""

from collections import OrderedDict
import configparser
import logging
import sys

import numpy as np
from mpmath import mp

from .coeffs import CalculationMode, TrigonometricCoeffs
from .utils import isiterable, timethis


__all__ = [
    "TableSettings",
    "evaluation_points",
    "compute_table",
    "format_table",
    "main",
]


class TableSettings(object):
    """Settings of the printed table.

    The class attributes are the defaults. Instances created by read() or with
    keyword arguments override them.
    """
    ## Distance of the evaluation points.
    step = 1e-2
    ## Number of evaluation points (centered around zero).
    num_points = 101
    ## Width of each number column.
    width = 14
    ## Digits after the decimal point.
    precision = 7
    ## String between the columns.
    separator = " | "
    ## Floating point type of the evaluation points.
    dtype = np.float64
    ## Whether to compute using `mpmath` instead of `dtype`.
    use_mp = False
    ## Decimal places for `mpmath` computations.
    dps = 30
    ## Calculation modes, one block of rows each.
    modes = tuple(m.value for m in CalculationMode)
    ## Quantities to print for each mode.
    names = TrigonometricCoeffs.NAMES
    ## Perturbation steps of the hyperdual mode.
    h1 = 1e-10
    h2 = None

    ## Parsers of the settings in the `[table]` INI section.
    _PARSERS = dict(
        step=float,
        num_points=int,
        width=int,
        precision=int,
        separator=lambda s: _unquote(s),
        dtype=lambda s: _parse_dtype(s),
        use_mp=lambda s: _parse_bool(s),
        dps=int,
        modes=lambda s: _parse_list(s),
        names=lambda s: _parse_list(s),
        h1=float,
        h2=lambda s: None if s.lower() == "none" else float(s),
    )

    def __init__(self, **kw):
        for key, value in kw.items():
            if key not in self._PARSERS:
                raise ValueError("Unknown setting: %s" % key)
            setattr(self, key, value)
        for mode in self.modes:
            CalculationMode.get(mode)
        TrigonometricCoeffs(CalculationMode.DIRECT).functions(self.names)

    def __repr__(self):
        return "<TableSettings(%s)>" % ", ".join(
            "%s=%r" % (key, getattr(self, key)) for key in self._PARSERS
        )

    @classmethod
    def read(cls, *filenames):
        r"""Create settings from the `[table]` section of INI files.

        Missing files are skipped. Keys not given keep their defaults.

        @raise ValueError for unknown keys or values that cannot be parsed.
        """
        config = configparser.ConfigParser(interpolation=None)
        found = config.read(filenames)
        for fname in filenames:
            if fname not in found:
                logging.info("Config file not found: %s", fname)
        kw = dict()
        if config.has_section("table"):
            for key, value in config.items("table"):
                if key not in cls._PARSERS:
                    raise ValueError("Unknown setting in [table]: %s" % key)
                try:
                    kw[key] = cls._PARSERS[key](value.strip())
                except (TypeError, ValueError) as e:
                    raise ValueError("Invalid value for %s: %r (%s)" % (key, value, e))
        return cls(**kw)

    def mode_options(self):
        r"""Options of the calculation modes as used by compute_table()."""
        return {CalculationMode.HYPERDUAL.value: dict(h1=self.h1, h2=self.h2)}


def _unquote(s):
    if len(s) >= 2 and s[0] == s[-1] and s[0] in "\"'":
        return s[1:-1]
    return s


def _parse_list(s):
    values = tuple(v.strip() for v in s.split(",") if v.strip())
    if not values:
        raise ValueError("empty list")
    return values


def _parse_bool(s):
    values = {"1": True, "yes": True, "true": True, "on": True,
              "0": False, "no": False, "false": False, "off": False}
    try:
        return values[s.lower()]
    except KeyError:
        raise ValueError("not a boolean")


def _parse_dtype(s):
    dtype = np.dtype(s).type
    if not issubclass(dtype, np.floating):
        raise ValueError("not a floating point type")
    return dtype


def evaluation_points(step=1e-2, num=101, dtype=np.float64):
    r"""Return `num` points `m*step` centered around zero.

    The integers `m` run from `-(num//2)` to `-(num//2)+num-1`, so that for
    odd `num` the points are symmetric and include zero.
    """
    start = -(num // 2)
    return np.arange(start, start + num).astype(dtype) * dtype(step)


def compute_table(points, modes, names=None, use_mp=False, **kw):
    r"""Evaluate coefficients in one or more modes on all points.

    @param points
        Iterable of points to evaluate at.
    @param modes
        Calculation mode or iterable of modes (see coeffs.CalculationMode).
    @param names
        Quantities to compute (see coeffs.TrigonometricCoeffs.function()).
        Default is coeffs.TrigonometricCoeffs.NAMES.
    @param use_mp
        Whether to evaluate using `mpmath` at the current precision.
    @param **kw
        Options of individual modes as dictionaries, keyed by the mode's
        value, e.g. ``hyperdual=dict(h1=1e-8)``.

    @return An `OrderedDict` mapping each mode's value to an `OrderedDict`
        mapping each name to the list of values.

    Floating point warnings are suppressed here, since `nan` and `inf` values
    at the singularity are part of the comparison.
    """
    if isinstance(modes, (str, CalculationMode)) or not isiterable(modes):
        modes = [modes]
    modes = [CalculationMode.get(m) for m in modes]
    for key in kw:
        CalculationMode.get(key)
    points = list(points)
    table = OrderedDict()
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        for mode in modes:
            logging.info("Computing %s coefficients on %d points", mode.value, len(points))
            coeffs = TrigonometricCoeffs(mode, use_mp=use_mp, **kw.get(mode.value, {}))
            table[mode.value] = OrderedDict(
                (name, [_evaluate(func, t) for t in points])
                for name, func in coeffs.functions(names).items()
            )
    return table


def _evaluate(func, t):
    r"""Evaluate `func(t)`, returning `nan` where `mpmath` divides by zero."""
    try:
        return func(t)
    except ZeroDivisionError:
        return mp.nan


def format_table(points, table, width=14, precision=7, separator=" | "):
    r"""Format a table created by compute_table() as a string.

    The first row contains the evaluation points. Each mode gets one block of
    rows, one row per quantity. Blocks are separated by lines of dashes.
    """
    name_len = max([len(name) for rows in table.values() for name in rows] or [0])
    fmt = "%s%*.*e"
    def _row(label, values):
        return label.rjust(name_len) + "".join(
            fmt % (separator, width, precision, float(v)) for v in values
        )
    points = list(points)
    line = "-" * (name_len + (width + len(separator)) * len(points))
    lines = [_row("", points), line]
    for rows in table.values():
        for name, values in rows.items():
            lines.append(_row(name, values))
        lines.append(line)
    return "\n".join(lines)


def _pop_flag(args, *flags):
    r"""Remove all occurrences of the given flags and return if one was found."""
    found = False
    for flag in flags:
        while flag in args:
            args.remove(flag)
            found = True
    return found


def _pop_option(args, flag):
    r"""Remove all `flag VALUE` pairs and return the values."""
    values = []
    while flag in args:
        idx = args.index(flag)
        if idx + 1 >= len(args):
            raise ValueError("Option %s requires an argument." % flag)
        values.append(args[idx+1])
        del args[idx:idx+2]
    return values


def main(args=None):
    r"""Command line entry point printing the comparison table.

    @param args
        Command line arguments (without the program name). Default is
        `sys.argv[1:]`.

    @return The exit code, `0` on success and `2` for invalid arguments or
        settings.
    """
    logging.basicConfig(format="%(levelname)s: %(message)s")
    args = list(sys.argv[1:] if args is None else args)
    if _pop_flag(args, '-v', '-verbose'):
        logging.getLogger().setLevel(logging.INFO)
    timing = _pop_flag(args, '-t', '--timing')
    try:
        config_files = _pop_option(args, '-c')
    except ValueError as e:
        logging.error("%s", e)
        return 2
    if args:
        logging.error("Unknown arguments: %s", " ".join(args))
        return 2
    try:
        settings = TableSettings.read(*config_files)
    except ValueError as e:
        logging.error("Invalid settings: %s", e)
        return 2
    logging.info("Settings: %r", settings)
    with timethis(silent=not timing), mp.workdps(settings.dps):
        points = evaluation_points(settings.step, settings.num_points,
                                   settings.dtype)
        table = compute_table(points, settings.modes, names=settings.names,
                              use_mp=settings.use_mp,
                              **settings.mode_options())
        print(format_table(points, table, width=settings.width,
                           precision=settings.precision,
                           separator=settings.separator))
    return 0
