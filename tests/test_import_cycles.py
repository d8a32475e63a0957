"""Import-cycle regression tests."""

from __future__ import annotations

import subprocess
import sys


def test_storage_package_imports_in_clean_interpreter():
    """The storage facade should import without touching other modules first."""
    process = subprocess.run(
        [
            sys.executable,
            "-c",
            "from portpath.infrastructure.storage import FilesystemContext, SystemPathDiscovery; print('ok')",
        ],
        capture_output=True,
        text=True,
        check=False,
    )
    assert process.returncode == 0, process.stderr
    assert "ok" in process.stdout


def test_config_imports_in_clean_interpreter():
    process = subprocess.run(
        [sys.executable, "-c", "import portpath.config; print('ok')"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert process.returncode == 0, process.stderr
    assert "ok" in process.stdout
