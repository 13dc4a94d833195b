# Licensed under the GPLv3 - see LICENSE
"""URL-safe base64 encoding and strict decoding.

Encoding uses the URL-safe alphabet, in which ``-`` and ``_`` replace the
``+`` and ``/`` of the standard one.  Decoding only accepts the canonical
text the encoder could have produced: characters outside the alphabet,
misplaced or missing padding, and non-zero unused bits all raise.
"""
import base64
import binascii
import re


__all__ = ['encode', 'decode']


_PADDED = re.compile(r'[A-Za-z0-9_-]*={0,2}')
_UNPADDED = re.compile(r'[A-Za-z0-9_-]*')


def encode(data, padding=True):
    """Encode bytes as URL-safe base64 text.

    Parameters
    ----------
    data : bytes-like
        Any contiguous buffer; e.g., a `~numpy.ndarray` of bytes.
    padding : bool, optional
        Whether to pad the text with ``=`` to a multiple of 4 characters.
        Default: `True`.

    Returns
    -------
    text : str
    """
    text = base64.urlsafe_b64encode(data).decode('ascii')
    return text if padding else text.rstrip('=')


def decode(text, padding=True):
    """Decode URL-safe base64 text.

    Parameters
    ----------
    text : str or bytes
        Encoded text.
    padding : bool, optional
        Whether the text is required to be padded with ``=`` to a
        multiple of 4 characters, or, if `False`, required to be unpadded.
        Default: `True`.

    Returns
    -------
    data : bytes

    Raises
    ------
    ValueError
        If the text is not canonical URL-safe base64.
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode('ascii')

    if padding:
        if not _PADDED.fullmatch(text) or len(text) % 4:
            raise ValueError("invalid characters or padding")
        padded = text
    else:
        if not _UNPADDED.fullmatch(text) or len(text) % 4 == 1:
            raise ValueError("invalid characters or length")
        padded = text + '=' * (-len(text) % 4)

    try:
        data = base64.urlsafe_b64decode(padded)
    except binascii.Error as exc:
        raise ValueError(str(exc)) from exc

    if encode(data, padding) != text:
        raise ValueError("non-zero unused bits in final character")

    return data
