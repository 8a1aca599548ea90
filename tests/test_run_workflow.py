"""Tests for the run_workflow command-line script."""

import argparse
import importlib.util
from pathlib import Path

import pytest

from src.runninghub.schemas import NodeInfo

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "run_workflow.py"


@pytest.fixture(scope="module")
def run_workflow():
    spec = importlib.util.spec_from_file_location("run_workflow", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestParseParam:
    """Test NODE:FIELD=VALUE parsing."""

    def test_simple(self, run_workflow):
        assert run_workflow.parse_param("8:text=Once upon a time") == NodeInfo(
            node_id="8", field_name="text", field_value="Once upon a time"
        )

    def test_value_may_contain_separators(self, run_workflow):
        param = run_workflow.parse_param("8:text=a:b=c")
        assert (param.node_id, param.field_name, param.field_value) == ("8", "text", "a:b=c")

    def test_empty_value(self, run_workflow):
        assert run_workflow.parse_param("6:seed=").field_value == ""

    @pytest.mark.parametrize(
        "value",
        ["8:text", "text=hello", ":text=hello", "8:=hello", "", "=x"],
    )
    def test_malformed(self, run_workflow, value):
        with pytest.raises(argparse.ArgumentTypeError):
            run_workflow.parse_param(value)
