# Licensed under the GPLv3 - see LICENSE
"""Plain-data element types and byte views.

Elements are described by numpy dtypes.  To be turned into bytes, a dtype
should not contain any bytes whose value is undefined (object references,
padding between the fields of a structured dtype).  To be recreated from
arbitrary bytes, it should in addition accept any bit pattern, which rules out
booleans (only 0 and 1 are valid) and unicode strings (code points are
limited to 0x10ffff).
"""
import numpy as np


__all__ = ['check_no_uninit', 'check_any_bit_pattern',
           'byte_view', 'from_bytes']


def _check_dtype(dtype, any_bit_pattern):
    if dtype.hasobject:
        raise TypeError(f"dtype {dtype} holds object references")

    if dtype.subdtype is not None:
        _check_dtype(dtype.subdtype[0], any_bit_pattern)

    elif dtype.names is not None:
        used = 0
        for name in dtype.names:
            field_dtype = dtype.fields[name][0]
            _check_dtype(field_dtype, any_bit_pattern)
            used += field_dtype.itemsize
        if used != dtype.itemsize:
            raise TypeError(f"structured dtype {dtype} has {dtype.itemsize} "
                            f"bytes but its fields only use {used}")

    elif any_bit_pattern and dtype.kind in 'bU':
        raise TypeError(f"dtype {dtype} does not accept arbitrary "
                        "bit patterns")

    if dtype.itemsize == 0:
        raise TypeError(f"dtype {dtype} has no size")


def check_no_uninit(dtype):
    """Check that elements of the given type can be viewed as bytes.

    Parameters
    ----------
    dtype : `~numpy.dtype` or anything that can be interpreted as one

    Returns
    -------
    dtype : `~numpy.dtype`

    Raises
    ------
    TypeError
        If the dtype holds objects or has padding bytes.
    """
    dtype = np.dtype(dtype)
    _check_dtype(dtype, any_bit_pattern=False)
    return dtype


def check_any_bit_pattern(dtype):
    """Check that elements of the given type can be recreated from any bytes.

    Like `check_no_uninit`, but also rejects dtypes for which some byte
    patterns do not represent valid values, such as `bool`.
    """
    dtype = np.dtype(dtype)
    _check_dtype(dtype, any_bit_pattern=True)
    return dtype


def byte_view(elements):
    """Read-only view of an array's memory as a flat array of bytes.

    Parameters
    ----------
    elements : `~numpy.ndarray`
        If not contiguous, a contiguous copy is viewed instead.

    Returns
    -------
    view : `~numpy.ndarray` of `~numpy.uint8`
    """
    elements = np.ascontiguousarray(elements)
    view = elements.reshape(-1).view(np.uint8)
    view.flags.writeable = False
    return view


def from_bytes(buffer, dtype):
    """Reinterpret bytes as a new 1-dimensional array with the given dtype.

    Parameters
    ----------
    buffer : bytes-like
        Raw bytes.  Their number should be a multiple of the item size.
    dtype : `~numpy.dtype`
        Type of the elements.

    Returns
    -------
    elements : `~numpy.ndarray`
        Owning (and thus writeable) array.

    Raises
    ------
    ValueError
        If the number of bytes does not fit an integer number of elements.
    """
    dtype = np.dtype(dtype)
    nbytes = len(buffer)
    if nbytes % dtype.itemsize:
        raise ValueError(f"cannot interpret {nbytes} bytes as elements of "
                         f"dtype {dtype}, which have {dtype.itemsize} bytes")
    if nbytes == 0:
        return np.empty(0, dtype)

    return np.frombuffer(buffer, dtype=dtype).copy()
