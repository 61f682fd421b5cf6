"""Tests for prerequisite probes."""
import asyncio

import pytest

from flow_migrate.errors import PrerequisiteError
from flow_migrate.steps.prerequisites import check_prerequisites, probe_executable

NOOP = "import sys\nsys.exit(0)\n"


class TestProbeExecutable:

    def test_found(self, empty_bin, install_tool):
        wrapper = install_tool(empty_bin, "bolt", NOOP)

        assert asyncio.run(probe_executable("bolt")) == str(wrapper)

    def test_missing_with_hint(self, empty_bin):
        with pytest.raises(PrerequisiteError) as exc_info:
            asyncio.run(probe_executable("flowtees", hint="pip3 install flowtees"))

        message = str(exc_info.value)
        assert "Unable to find" in message
        assert "flowtees" in message
        assert "Run:" in message
        assert "pip3 install flowtees" in message
        assert exc_info.value.tool == "flowtees"

    def test_missing_without_hint(self, empty_bin):
        with pytest.raises(PrerequisiteError) as exc_info:
            asyncio.run(probe_executable("bolt"))

        assert "Run:" not in str(exc_info.value)


class TestCheckPrerequisites:
    """Both tools must be present."""

    def test_both_present(self, fake_bin):
        asyncio.run(check_prerequisites())

    def test_package_manager_missing(self, empty_bin, install_tool):
        install_tool(empty_bin, "flowtees", NOOP)

        with pytest.raises(PrerequisiteError) as exc_info:
            asyncio.run(check_prerequisites())

        assert exc_info.value.tool == "bolt"

    def test_converter_missing(self, empty_bin, install_tool):
        install_tool(empty_bin, "bolt", NOOP)

        with pytest.raises(PrerequisiteError) as exc_info:
            asyncio.run(check_prerequisites())

        assert exc_info.value.tool == "flowtees"
        assert "pip3 install flowtees" in str(exc_info.value)

    def test_both_missing_reports_one(self, empty_bin):
        """Which probe wins is not defined, but exactly one error surfaces."""
        with pytest.raises(PrerequisiteError) as exc_info:
            asyncio.run(check_prerequisites())

        assert exc_info.value.tool in ("bolt", "flowtees")
