# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout sgres.

Every failure sgres expects to meet is an `SGresError`: a failed or garbled
scontrol query, a GRES descriptor that does not match the expected grammar,
or resource bookkeeping that does not add up. All of them abort the
invocation; each carries the exit code the command reports.
"""

from .config import CFG


class SGresError(Exception):
    """Common exception type for all expected sgres errors."""

    exit_code = CFG.exit_codes.default


class SGresCollaboratorError(SGresError):
    """Raised when scontrol fails or its output cannot be decoded."""

    pass


class SGresParseError(SGresError):
    """Raised when a GRES descriptor string does not match the expected grammar."""

    pass


class SGresArithmeticError(SGresError):
    """Raised when a node reports more of a resource in use than it has in total."""

    pass
