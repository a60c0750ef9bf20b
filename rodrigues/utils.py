r"""@package rodrigues.utils

General utilities for simplifying certain tasks in Python.
"""

import time
from timeit import default_timer
import datetime
from contextlib import contextmanager


__all__ = [
    "lmap",
    "isiterable",
    "timethis",
]


def lmap(func, *iterables):
    r"""Implementation of `map` that returns a list instead of a generator."""
    return list(map(func, *iterables))


def isiterable(obj):
    """Check whether an object is iterable.

    Note that this returns `True` for strings, which you may or may not intend
    to check for.
    """
    try:
        iter(obj)
    except TypeError:
        return False
    return True


@contextmanager
def timethis(start_msg=None, end_msg="Elapsed time: {}", silent=False, eol=True):
    r"""Context manager for timing code execution.

    @param start_msg
        String to print at the beginning. May contain the placeholder
        ``'{now}'``, which will be replaced by the current date and time. A
        value of `True` will be taken to mean ``"Started: {now}``.
    @param end_msg
        String to print after execution. Default is ``"Elapsed time: {}"``.
    @param silent
        Whether to print anything at all. Used by the table driver to time
        its run only when asked to.
    @param eol
        Whether to print a newline after each message. May be useful to print
        execution time in line with the starting message.
    """
    if silent:
        yield
        return
    if start_msg is True:
        start_msg = "Started: {now}"
    if start_msg is not None:
        print(start_msg.format(now=time.strftime('%Y-%m-%d %H:%M:%S')),
              end='\n' if eol else '', flush=not eol)
    start = default_timer()
    try:
        yield
    finally:
        if end_msg is not None:
            time_str = datetime.timedelta(seconds=default_timer()-start)
            print(end_msg.format(time_str))
