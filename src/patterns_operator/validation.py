"""Checks run on a qualified Pattern before and after convergence."""

from __future__ import annotations

from typing import Any

from .exceptions import InvalidTargetRepo, ValidationError


def pre_validate(qualified: dict[str, Any]) -> None:
    """Reject Patterns that must not drive any downstream mutation.

    Raises:
        InvalidTargetRepo: If the target repository is not an http/https URL
        ValidationError: If an extra parameter has no name
    """
    git = qualified["spec"]["gitSpec"]
    target_repo = git.get("targetRepo", "")

    if target_repo.startswith("git@"):
        # SSH remotes are common copy-paste mistakes; say so explicitly
        raise InvalidTargetRepo(f"Invalid TargetRepo: {target_repo}")
    if not target_repo.startswith(("https://", "http://")):
        raise InvalidTargetRepo(f"TargetRepo must be either http/https: {target_repo}")
    if not git.get("hostname"):
        raise InvalidTargetRepo(f"TargetRepo has no hostname: {target_repo}")

    for index, extra in enumerate(qualified["spec"].get("extraParameters") or []):
        if not isinstance(extra, dict) or not extra.get("name"):
            raise ValidationError(f"extraParameters[{index}] has no name")


def post_validate(qualified: dict[str, Any]) -> None:
    """Checks that only make sense once the Application exists.

    Nothing is checked yet; values file validation belongs here.
    """
