"""
Thin dispatch layer over the casbin enforcer.

Model and policy evaluation belong to casbin; this module only builds an
enforcer from the command-line inputs and forwards a single call to it.
"""

from pathlib import Path

import casbin
from casbin.model import Model
from casbin.persist.adapter import load_policy_line
from casbin.persist.adapters import FileAdapter

from casbin_cli.config import get_logger
from casbin_cli.exceptions import EnforcementError

logger = get_logger("enforcer")


def unescape_newlines(value: str) -> str:
    """Turn literal ``\\n`` sequences typed on the command line into newlines."""
    return value.replace("\\n", "\n")


def split_lines(text: str) -> list[str]:
    """Split inline text on ``|`` or ``\\n`` separators, dropping blank lines."""
    lines = unescape_newlines(text).replace("|", "\n").splitlines()
    return [line.strip() for line in lines if line.strip()]


def load_model(model: str) -> str | Model:
    """Return the model path as-is, or a Model parsed from inline text.

    Inline model text may separate its lines with ``|`` or ``\\n``.
    """
    if Path(model).is_file():
        return model

    parsed = Model()
    parsed.load_model_from_text("\n".join(split_lines(model)))
    return parsed


def is_policy_text(policy: str) -> bool:
    """Inline policy rules always carry comma-separated fields; paths do not."""
    return not Path(policy).is_file() and "," in policy


class EnforcementDispatcher:
    """Forward enforcement and policy-management calls to a casbin Enforcer.

    The policy is either a CSV file, which add/remove calls write back to, or
    inline policy text, which lives only for this invocation.
    """

    def __init__(self, model: str, policy: str):
        if not model:
            raise EnforcementError("A model is required (-m/--model)")
        if not policy:
            raise EnforcementError("A policy is required (-p/--policy)")

        self.policy_file: Path | None = None
        if not is_policy_text(policy):
            if not Path(policy).is_file():
                raise EnforcementError(f"Policy file not found: {policy}")
            self.policy_file = Path(policy)

        try:
            if self.policy_file is not None:
                self.enforcer = casbin.Enforcer(load_model(model), FileAdapter(policy))
            else:
                self.enforcer = casbin.Enforcer(load_model(model))
                for line in split_lines(policy):
                    load_policy_line(line, self.enforcer.get_model())
                self.enforcer.build_role_links()
        except Exception as e:
            logger.error("Enforcer could not be created", model=model, policy=policy, error=str(e))
            raise EnforcementError(f"Could not create enforcer: {e}") from e

    def enforce(self, *rvals: str) -> bool:
        """Check whether the request is allowed."""
        return bool(self._call("enforce", *rvals))

    def enforce_ex(self, *rvals: str) -> tuple[bool, list[str]]:
        """Check the request and return the policy rule that decided it."""
        allowed, explain = self._call("enforce_ex", *rvals)
        return bool(allowed), list(explain or [])

    def add_policy(self, *params: str) -> bool:
        """Add a policy rule, persisting it when the policy is a file."""
        added = bool(self._call("add_policy", *params))
        if added:
            self._persist()
        return added

    def remove_policy(self, *params: str) -> bool:
        """Remove a policy rule, persisting the change when the policy is a file."""
        removed = bool(self._call("remove_policy", *params))
        if removed:
            self._persist()
        return removed

    def _persist(self) -> None:
        # Inline policy text has no backing store
        if self.policy_file is not None:
            self._call("save_policy")

    def _call(self, method: str, *args: str):
        args = tuple(unescape_newlines(arg) for arg in args)
        try:
            return getattr(self.enforcer, method)(*args)
        except Exception as e:
            logger.error("Enforcer call failed", method=method, args=list(args), error=str(e))
            raise EnforcementError(f"{method} failed: {e}") from e
