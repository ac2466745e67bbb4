# phaseflow:header:start
#
#   project      : PhaseFlow
#   file         : exit_codes.py
#   file_relpath : src/phaseflow/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# phaseflow:header:end

"""Exit codes for the PhaseFlow CLI.

PhaseFlow aligns with the BSD `sysexits` convention so other tooling can
interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the PhaseFlow CLI.

    Attributes:
        SUCCESS: Successful execution with no errors.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        NO_MATCH: No presenter matches the requested route, content type and
            tenant. Mirrors BSD ``EX_UNAVAILABLE (69)``.
        PIPELINE_ERROR: A fetcher or transformer failed. Mirrors BSD
            ``EX_SOFTWARE (70)``.
        CONFIG_ERROR: Configuration error (malformed config, unloadable plugin
            module). Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    NO_MATCH = 69  # EX_UNAVAILABLE
    PIPELINE_ERROR = 70  # EX_SOFTWARE
    CONFIG_ERROR = 78  # EX_CONFIG
