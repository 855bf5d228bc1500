"""Tests that each package can be the first one a process imports."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).parent.parent / "src"


@pytest.mark.parametrize(
    "module",
    [
        "bookit.database",
        "bookit.database.base",
        "bookit.domain",
        "bookit.domain.statements",
        "bookit.utils",
        "bookit.cli.main",
    ],
)
def test_fresh_interpreter_import(module):
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))

    result = subprocess.run(
        [sys.executable, "-c", f"import {module}"],
        capture_output=True,
        text=True,
        env=env,
    )

    assert result.returncode == 0, result.stderr


def test_domain_services_resolve_lazily():
    import bookit.domain as domain
    from bookit.domain.rules import RuleService

    assert domain.RuleService is RuleService
    with pytest.raises(AttributeError):
        domain.NoSuchService
