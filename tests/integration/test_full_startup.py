"""End-to-end startup tests — a real host process, compiler and exec.

The host is a small Python script calling ``dyre.wrap_main``.  The config
"source" is a shell script and the "compiler" copies it into place, so the
custom binary records the arguments it was started with.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from pathlib import Path

import pytest

pytestmark = pytest.mark.skipif(os.name != "posix", reason="needs /bin/sh and exec")

REPO_ROOT = Path(__file__).resolve().parents[2]

_HOST = """\
import dyre


def real_main(config):
    print(f"default main: {config}")


def show_error(config, errors):
    return f"{config} (errors)"


dyre.wrap_main(
    dyre.Params(
        project_name="e2e",
        real_main=real_main,
        show_error=show_error,
        source_extension="sh",
    ),
    "default",
)
"""

_PAST = 1_000_000


class TestFullStartup:
    """A fresh project: compile once, hand off, keep arguments intact."""

    @pytest.fixture
    def project(self, tmp_path: Path) -> Path:
        host = tmp_path / "host.py"
        host.write_text(_HOST)
        os.utime(host, (_PAST, _PAST))
        return tmp_path

    def _compiler(self, root: Path, *, fail: bool = False) -> str:
        script = root / "compile.sh"
        if fail:
            body = 'echo "e2e.sh:1: syntax error" >&2\nexit 1\n'
        else:
            body = f'echo run >> "{root / "compiles.txt"}"\ncp "$1" "$2"\nchmod +x "$2"\n'
        script.write_text("#!/bin/sh\n" + body)
        script.chmod(0o755)
        return f"{shlex.quote(str(script))} {{config_file}} {{output}}"

    def _config(self, root: Path) -> Path:
        config = root / "e2e.sh"
        config.write_text(
            "#!/bin/sh\n"
            f"printf '%s\\n' \"$@\" > \"{root / 'args.txt'}\"\n"
        )
        os.utime(config, (_PAST + 10, _PAST + 10))
        return config

    def _run(self, root: Path, compiler_command: str, *args: str) -> subprocess.CompletedProcess:
        env = dict(os.environ)
        env.pop("DYRE_STATE_PATH", None)
        env["DYRE_COMPILER_COMMAND"] = compiler_command
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(REPO_ROOT), env.get("PYTHONPATH")])
        )
        return subprocess.run(
            [sys.executable, str(root / "host.py"), "--dyre-debug", *args],
            cwd=root,
            env=env,
            capture_output=True,
            text=True,
            timeout=60,
        )

    def test_no_config_runs_default(self, project: Path):
        result = self._run(project, self._compiler(project), "alpha")

        assert result.returncode == 0, result.stderr
        assert "default main: default" in result.stdout
        assert not (project / "compiles.txt").exists()

    def test_compile_and_handoff(self, project: Path):
        self._config(project)
        result = self._run(project, self._compiler(project), "alpha", "beta gamma")

        assert result.returncode == 0, result.stderr
        assert "default main" not in result.stdout
        assert (project / "compiles.txt").read_text().count("run") == 1
        assert (project / "args.txt").read_text().splitlines() == [
            "--dyre-debug", "alpha", "beta gamma",
        ]

    def test_second_start_reuses_custom_binary(self, project: Path):
        self._config(project)
        compiler = self._compiler(project)
        self._run(project, compiler, "first")
        result = self._run(project, compiler, "second")

        assert result.returncode == 0, result.stderr
        assert (project / "compiles.txt").read_text().count("run") == 1
        assert (project / "args.txt").read_text().splitlines() == ["--dyre-debug", "second"]

    def test_compile_failure_falls_back_to_default(self, project: Path):
        self._config(project)
        result = self._run(project, self._compiler(project, fail=True), "alpha")

        assert result.returncode == 0, result.stderr
        assert "default main: default (errors)" in result.stdout
        assert "syntax error" in (project / "cache" / "errors.log").read_text()
