"""Text sources and sinks accepted by the readers and writers."""

import os
from contextlib import contextmanager
from typing import Iterator

from matrixkit.error import ArgumentNullError

__all__ = ['iter_lines', 'open_target', 'format_number']


def _is_path(value) -> bool:
    return isinstance(value, (str, os.PathLike))


def iter_lines(source, param_name: str = 'reader') -> Iterator[str]:
    """
    Yield the lines of a source without their line terminators.

    Args:
        source: File path, text stream, or any iterable of strings.
        param_name: Parameter named if source is None.

    Raises:
        ArgumentNullError: If source is None.
    """
    if source is None:
        raise ArgumentNullError(param_name=param_name)
    if _is_path(source):
        return _iter_file(source)
    return (line.rstrip('\r\n') for line in source)


def _iter_file(path) -> Iterator[str]:
    with open(path, 'r', encoding='utf-8') as stream:
        for line in stream:
            yield line.rstrip('\r\n')


@contextmanager
def open_target(target, param_name: str = 'writer'):
    """
    Context manager yielding a writable text stream.

    Paths are opened (and closed on exit); streams are yielded as-is.
    """
    if target is None:
        raise ArgumentNullError(param_name=param_name)
    if _is_path(target):
        with open(target, 'w', encoding='utf-8', newline='\n') as stream:
            yield stream
    else:
        yield target
        if hasattr(target, 'flush'):
            target.flush()


def format_number(value: float) -> str:
    """Shortest round-trip text of a float; integral values drop ".0"."""
    text = repr(float(value))
    return text[:-2] if text.endswith('.0') else text
