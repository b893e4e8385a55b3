import pytest

from campuscoffee.cli import exit_code_for, parse_args
from campuscoffee.common.constants import EXIT_BAD_INPUT, EXIT_CONFLICT, EXIT_HARD_FAIL, EXIT_NOT_FOUND
from campuscoffee.common.errors import (
    ConfigError,
    DuplicateName,
    ExternalNodeNotFound,
    MissingRequiredFields,
    RecordNotFound,
)


def test_parse_args_defaults():
    args = parse_args(["list"])
    assert args.command == "list"
    assert args.config_dir == "./config"
    assert args.overlay_config_dir is None
    assert args.node_id is None


def test_parse_args_import_reads_node_id():
    args = parse_args(["import", "--node-id", "5589879349"])
    assert args.node_id == 5589879349


def test_parse_args_import_requires_node_id():
    with pytest.raises(SystemExit):
        parse_args(["import"])


def test_parse_args_get_requires_id():
    with pytest.raises(SystemExit):
        parse_args(["get"])


def test_exit_code_for_maps_error_kinds():
    assert exit_code_for(ExternalNodeNotFound(1)) == EXIT_NOT_FOUND
    assert exit_code_for(RecordNotFound(1)) == EXIT_NOT_FOUND
    assert exit_code_for(MissingRequiredFields(1, ["name"])) == EXIT_BAD_INPUT
    assert exit_code_for(DuplicateName("x")) == EXIT_CONFLICT
    assert exit_code_for(ConfigError("broken")) == EXIT_HARD_FAIL
