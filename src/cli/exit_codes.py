"""Process exit codes for esarrow commands."""

from __future__ import annotations

from enum import IntEnum

from cyclopts.exceptions import CycloptsError, ValidationError

from columnar.documents import DocumentDecodeError
from mapping_spec.loader import MappingError


class ExitCode(IntEnum):
    """Exit status of an esarrow command.

    - 0: success
    - 2-4: bad command line, bad input files, bad configuration
    - 13: the conversion itself failed (for example an unwritable output)
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4
    EXECUTION_ERROR = 13

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Return the exit code for an error raised while running a command.

        Returns
        -------
        ExitCode
            ``VALIDATION_ERROR`` for unusable mappings, documents or option
            values, ``CONFIG_ERROR`` for unknown write profiles and unreadable
            input paths, ``EXECUTION_ERROR`` for other I/O failures.
        """
        match exc:
            case ValidationError():
                return cls.VALIDATION_ERROR
            case CycloptsError():
                return cls.PARSE_ERROR
            case MappingError() | DocumentDecodeError():
                return cls.VALIDATION_ERROR
            case KeyError():
                # Unknown write profile names.
                return cls.CONFIG_ERROR
            case FileNotFoundError() | PermissionError() | IsADirectoryError():
                return cls.CONFIG_ERROR
            case OSError():
                return cls.EXECUTION_ERROR
            case ValueError():
                return cls.VALIDATION_ERROR
            case _:
                return cls.GENERAL_ERROR

    @classmethod
    def from_result(cls, result: object) -> int:
        """Return the process status for a command's return value."""
        if isinstance(result, int):
            return int(result)
        return cls.SUCCESS if result is None else cls.GENERAL_ERROR


__all__ = ["ExitCode"]
