"""Shared progress bar utility for genoscan.

Provides a progress iterator for line streams whose length may not be known
in advance (a tabix region yields lines until it is exhausted).
"""

import sys
from collections.abc import Iterator

import progressbar


def progress_iterator(
    iterable: Iterator, total: int | None = None, desc: str = ""
) -> Iterator:
    """Wrap iterator with progressbar2 progress display.

    With a known total the bar shows percentage and ETA; otherwise it shows a
    running count and elapsed time. Writes to stdout.

    The bar is finalized in a try/finally block so that early breaks or
    exceptions from the caller don't leave terminal output corrupted.

    Args:
        iterable: Iterator to wrap.
        total: Total number of items, or None if unknown.
        desc: Optional description prefix.

    Yields:
        Items from the wrapped iterator.
    """
    prefix = f"{desc}: " if desc else ""
    if total is None:
        widgets = [prefix, progressbar.Counter(), " ", progressbar.Timer()]
        max_value = progressbar.UnknownLength
    else:
        widgets = [
            prefix,
            progressbar.Counter(),
            f"/{total} ",
            progressbar.Percentage(),
            " ",
            progressbar.Bar(),
            " ",
            progressbar.Timer(),
            " ",
            progressbar.ETA(),
        ]
        max_value = total
    bar = progressbar.ProgressBar(max_value=max_value, widgets=widgets, fd=sys.stdout)
    bar.start()
    try:
        for i, item in enumerate(iterable):
            yield item
            bar.update(i + 1)
    finally:
        bar.finish()
