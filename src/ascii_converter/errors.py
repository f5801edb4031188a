"""Errors raised by the conversion pipeline.

Every failure is fatal for a run; the CLI reports the message and exits
non-zero. Library callers can catch ``ConverterError`` to handle them all.
"""


class ConverterError(Exception):
    """Base class for all conversion failures."""


class InputFileError(ConverterError):
    """The input file could not be opened or read."""


class DecodeError(ConverterError):
    """The input file is not a decodable PNG."""


class OutputFileError(ConverterError):
    """The output file could not be created."""


class EncodeError(ConverterError):
    """The output could not be encoded or written."""


class InvalidFormatError(ConverterError):
    """An unrecognised output format was requested."""


__all__ = [
    "ConverterError",
    "InputFileError",
    "DecodeError",
    "OutputFileError",
    "EncodeError",
    "InvalidFormatError",
]
