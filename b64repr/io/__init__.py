# Licensed under the GPLv3 - see LICENSE
"""General record I/O routines and entry point.

Contains general ``dumps`` and ``loads`` functions that write and read
records in a given format, or, for reading, can iterate over possible
formats to find one that works.  Besides the built-in `~b64repr.json`
and `~b64repr.msgpack` formats, formats can be discovered via the
'b64repr.formats' entry point.

Any 'b64repr.formats' entry points are treated as possible formats if they
point to a module (e.g., 'json = b64repr.json').  Any entries that
have object names (e.g., 'fancy_dumps = mypackage.io:dumps') are just
added to the name space.  A format module should define ``dumps(obj)`` and
``loads(data, cls)``.

Attributes
----------
FORMATS : list
    Available formats.

"""
import sys

import entrypoints

from ..base.errors import DeserializationError


__all__ = ['dumps', 'loads']


__self__ = sys.modules[__name__]
"""Link to our own module, for convenience below."""

# Format modules are imported only when first used.
_entries = {}
"""Format entry points, by name."""
_bad_entries = set()
"""Names of formats whose module could not be imported; never retried."""


def __getattr__(attr):
    """Import a format module on first access.

    Refreshes the format entry points if the name is not yet known, and
    imports the module it points to.  Formats that fail to import are
    dropped from ``FORMATS`` and remembered in ``_bad_entries``.
    """
    if attr.startswith('_') or attr in _bad_entries:
        raise AttributeError(f"module {__name__!r} has no attribute {attr!r}")

    FORMATS = globals().setdefault('FORMATS', [])
    if attr not in _entries:
        if not _entries:
            # json and msgpack come first, and are found even when the
            # package is not installed.
            _entries.update({
                fmt: entrypoints.EntryPoint(fmt, 'b64repr.'+fmt, '')
                for fmt in ('json', 'msgpack')
            })

        _entries.update(entrypoints.get_group_named('b64repr.formats'))
        FORMATS.extend([name for name, entry in _entries.items()
                        if not (entry.object_name or name in FORMATS)])
        if attr == 'FORMATS':
            return FORMATS

    entry = _entries.get(attr, None)
    if entry is None:
        raise AttributeError(f"module {__name__!r} has no attribute {attr!r}")

    try:
        value = entry.load()
    except Exception:
        _entries.pop(attr)
        _bad_entries.add(attr)
        if attr in FORMATS:
            FORMATS.remove(attr)
        raise AttributeError(f"format {attr!r} ({entry}) was not loadable "
                             "and has been removed")

    # Cache on the module; later lookups bypass __getattr__.
    globals()[attr] = value
    return value


def __dir__():
    __getattr__('FORMATS')  # Refreshes the entries.
    return sorted(set(globals()).union(_entries).difference(_bad_entries))


def dumps(obj, format):
    """Write a record in the given format.

    Parameters
    ----------
    obj : object
        Record (dataclass instance) to write.
    format : str
        Name of the format, e.g., 'json' or 'msgpack'.

    Returns
    -------
    data : str or bytes
        As produced by the format.
    """
    if not isinstance(format, str):
        raise ValueError("a single format must be given for writing.")

    module = getattr(__self__, format)
    return module.dumps(obj)


def loads(data, cls=None, format=None):
    """Read a record written in some format.

    Parameters
    ----------
    data : str or bytes
        Data to read.
    cls : type, optional
        Dataclass of the record.  If not given, the decoded value is
        returned as is.
    format : str or tuple of str, optional
        The format the data are in.  If a tuple of possible formats, all will
        be tried in turn.  By default, all available formats are tried.

    Raises
    ------
    ValueError
        If the data could not be read in any of the formats.  If a single
        format is given, this will be the format's `DeserializationError`.
    """
    if format is None:
        format = tuple(__self__.FORMATS)

    if isinstance(format, tuple):
        failures = {}
        for format_ in format:
            try:
                return loads(data, cls, format_)
            except DeserializationError as exc:
                failures[format_] = exc

        raise ValueError(f"data could not be read as any of {set(format)}: "
                         + "; ".join(f"{fmt}: {exc}"
                                     for fmt, exc in failures.items()))

    module = getattr(__self__, format)
    return module.loads(data, cls)
