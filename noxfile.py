# topmark:header:start
#
#   project      : NotifyURL
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Nox sessions for NotifyURL.

Sessions:
  - `tests`: fast pytest run for every supported Python.
  - `property_test`: the slow Hypothesis round-trip suites (opt-in).
  - `typecheck`: pyright for every supported Python.
  - `lint`: ruff and pydoclint; `lint_fixall` applies ruff fixes.
  - `format_check` / `format`: ruff formatting.
  - `package_check`: build sdist and wheel, then `twine check`.

Supported Python versions come from the ``Programming Language :: Python ::
X.Y`` classifiers in ``pyproject.toml``.
"""

from __future__ import annotations

import pathlib
import re
import shutil
import sys
from typing import Any

import nox

if sys.version_info >= (3, 11):
    import tomllib as _toml

    def _load_toml(text: str) -> dict[str, Any]:
        return _toml.loads(text)

else:
    import toml as _toml

    def _load_toml(text: str) -> dict[str, Any]:
        return _toml.loads(text)


ROOT: pathlib.Path = pathlib.Path(__file__).parent
CURRENT_PYTHON: str = f"{sys.version_info.major}.{sys.version_info.minor}"
DEV_INSTALL: tuple[str, ...] = ("-e", ".[dev]")
FAST_MARKERS: str = "not hypothesis_slow"

_CLASSIFIER_RE = re.compile(r"^Programming Language :: Python :: (\d+)\.(\d+)$")


def supported_pythons() -> list[str]:
    """Python versions declared by the project classifiers, oldest first.

    Falls back to the running interpreter when ``pyproject.toml`` is missing
    or declares no ``X.Y`` classifier.
    """
    path: pathlib.Path = ROOT / "pyproject.toml"
    if not path.exists():
        return [CURRENT_PYTHON]
    classifiers: list[str] = _load_toml(path.read_text(encoding="utf-8")).get(
        "project", {}
    ).get("classifiers", [])

    found: set[tuple[int, int]] = set()
    for classifier in classifiers:
        match = _CLASSIFIER_RE.match(classifier)
        if match:
            found.add((int(match.group(1)), int(match.group(2))))
    return [f"{major}.{minor}" for major, minor in sorted(found)] or [CURRENT_PYTHON]


PYTHONS: list[str] = supported_pythons()

nox.options.sessions = ["lint", "format_check", "tests", "typecheck"]


@nox.session(python=PYTHONS)
def tests(session: nox.Session) -> None:
    """Fast test suite."""
    session.install(*DEV_INSTALL)
    session.run("pytest", "-q", "-m", FAST_MARKERS, *session.posargs)


@nox.session
def property_test(session: nox.Session) -> None:
    """Hypothesis round-trip suites marked ``hypothesis_slow``."""
    session.install(*DEV_INSTALL)
    session.run("pytest", "-vv", "-m", "hypothesis_slow", *session.posargs)


@nox.session(python=PYTHONS)
def typecheck(session: nox.Session) -> None:
    """Pyright against each supported Python."""
    session.install(*DEV_INSTALL)
    session.run("pyright", "--pythonversion", str(session.python))


@nox.session
def lint(session: nox.Session) -> None:
    """Ruff and pydoclint."""
    session.install(*DEV_INSTALL)
    session.run("ruff", "check", ".")
    session.run("pydoclint", "-q", "src/notifyurl")


@nox.session
def lint_fixall(session: nox.Session) -> None:
    """Apply ruff autofixes."""
    session.install(*DEV_INSTALL)
    session.run("ruff", "check", "--fix", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Fail on unformatted files."""
    session.install(*DEV_INSTALL)
    session.run("ruff", "format", "--check", ".")


@nox.session
def format(session: nox.Session) -> None:
    """Format in place."""
    session.install(*DEV_INSTALL)
    session.run("ruff", "format", ".")


@nox.session(python=CURRENT_PYTHON)
def package_check(session: nox.Session) -> None:
    """Build distributions into a clean ``dist/`` and validate their metadata."""
    session.install(*DEV_INSTALL)
    shutil.rmtree(ROOT / "dist", ignore_errors=True)
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")
