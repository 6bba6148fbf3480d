"""Resolution of the invocation switches into one immutable options value.

The four switches mirror the build template's parameters. A switch is ``None`` when
the caller did not pass it, which is what the precedence rules look at.
"""

from typing import Optional

from pydantic import BaseModel


class ResolvedOptions(BaseModel):
    """Effective pipeline options, computed once and passed to every stage."""

    increment_build: bool = True
    increment_revision: bool = False
    check_in: bool = True

    class Config:
        frozen = True
        extra = "forbid"


def resolve_options(do_not_increment: Optional[bool] = None,
                    increment_build_number: Optional[bool] = None,
                    increment_revision_number: Optional[bool] = None,
                    do_not_check_in: Optional[bool] = None) -> ResolvedOptions:
    """Apply the switch precedence rules.

    ``do_not_increment`` wins over everything and also disables check-in. An explicit
    revision increment without an explicit build increment turns the default build
    increment off.

    Args:
        do_not_increment (bool, optional): ``-DoNotIncrement`` switch.
        increment_build_number (bool, optional): ``-IncrementBuildNumber`` switch.
        increment_revision_number (bool, optional): ``-IncrementRevisionNumber`` switch.
        do_not_check_in (bool, optional): ``-DoNotCheckIn`` switch.

    Returns:
        ResolvedOptions: The effective options.
    """
    if do_not_increment:
        return ResolvedOptions(increment_build=False, increment_revision=False, check_in=False)

    increment_build = True if increment_build_number is None else bool(increment_build_number)
    if increment_revision_number and increment_build_number is None:
        increment_build = False

    return ResolvedOptions(
        increment_build=increment_build,
        increment_revision=bool(increment_revision_number),
        check_in=not do_not_check_in,
    )
