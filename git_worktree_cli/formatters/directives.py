"""Shell directives printed for the invoking shell to evaluate."""

import shlex


def cd_directive(path: str) -> str:
    """``cd <path>``, quoted only when the shell would split or expand it."""
    return f"cd {shlex.quote(path)}"


def checkout_directive(branch_name: str) -> str:
    """``git checkout <branch>``"""
    return f"git checkout {shlex.quote(branch_name)}"
