"""Pytest configuration and fixtures."""
import json
import os
import stat
import sys
import textwrap
from pathlib import Path

import pytest

# Set test environment variables
os.environ["FLOW_MIGRATE_LOG_LEVEL"] = "DEBUG"
os.environ["FLOW_MIGRATE_PROMPT_IDLE_TIMEOUT_S"] = "10"
os.environ.pop("FLOW_MIGRATE_PROMPTS_FILE", None)
os.environ.pop("FLOW_MIGRATE_STRICT_CONVERTER_EXIT", None)


FAKE_FLOWTEES = textwrap.dedent(
    """
    import json
    import os
    import sys

    target = sys.argv[1]
    answers = []
    for prompt in (
        "Do you want to configure build files? (y/n) ",
        "Do you want to continue? (y/n) ",
        "Do you want to override this file? (y/n) ",
    ):
        sys.stdout.write(prompt)
        sys.stdout.flush()
        answers.append(sys.stdin.readline().strip())

    with open(os.path.join(target, "index.ts"), "w") as f:
        f.write("export {};\\n")

    log = os.environ.get("FAKE_FLOWTEES_LOG")
    if log:
        with open(log, "w") as f:
            json.dump({"argv": sys.argv[1:], "answers": answers}, f)
    """
)

FAKE_BOLT = textwrap.dedent(
    """
    import json
    import os
    import sys

    if os.environ.get("FAKE_BOLT_FAIL"):
        sys.stderr.write(os.environ["FAKE_BOLT_FAIL"])
        sys.exit(1)

    command, name = sys.argv[1], sys.argv[2]
    with open("package.json") as f:
        manifest = json.load(f)
    deps = manifest.setdefault("dependencies", {})

    if command == "remove":
        if name not in deps:
            sys.stderr.write(
                'error You do not have a dependency named "%s" installed.\\n' % name
            )
            sys.exit(1)
        del deps[name]
    elif command == "add":
        deps.setdefault(name, "^2.0.0")
    else:
        sys.stderr.write("error Unknown command %s\\n" % command)
        sys.exit(1)

    with open("package.json", "w") as f:
        json.dump(manifest, f, indent=2)
    """
)


def write_tool(bin_dir: Path, name: str, source: str) -> Path:
    """Install a Python script as an executable called name in bin_dir."""
    script = bin_dir / f"{name}.py"
    script.write_text(source)
    wrapper = bin_dir / name
    wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n')
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return wrapper


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached per process; start every test clean."""
    from flow_migrate.config import reset_settings

    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def package_dir(tmp_path):
    """A package that still uses Flow: @babel/runtime installed, no types entry."""
    pkg = tmp_path / "pkg"
    pkg.mkdir()
    manifest = {
        "name": "@atlaskit/example",
        "version": "1.0.0",
        "main": "index.js",
        "dependencies": {"@babel/runtime": "^7.0.0", "react": "^16.8.0"},
    }
    (pkg / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")
    (pkg / ".npmignore").write_text("src/__tests__\ndocs\n")
    (pkg / "index.js").write_text("// @flow\nexport default 1;\n")
    return pkg


@pytest.fixture
def empty_bin(tmp_path, monkeypatch):
    """A bin directory that is the only entry on PATH."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", str(bin_dir))
    return bin_dir


@pytest.fixture
def fake_bin(tmp_path, monkeypatch):
    """Fake bolt and flowtees executables placed first on PATH."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)
    write_tool(bin_dir, "bolt", FAKE_BOLT)
    write_tool(bin_dir, "flowtees", FAKE_FLOWTEES)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    monkeypatch.setenv("FAKE_FLOWTEES_LOG", str(tmp_path / "flowtees.json"))
    return bin_dir


@pytest.fixture
def install_tool():
    """Return a helper that installs a Python script as an executable."""
    return write_tool


@pytest.fixture
def fake_flowtees_source():
    return FAKE_FLOWTEES
