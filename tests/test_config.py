"""Tests for config loading and validation."""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from hostcheck.config import RunConfig, is_target, load_config


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "hostcheck.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_load_minimal_config(tmp_yaml):
    path = tmp_yaml("""\
        tests:
          - smoke:test_one
    """)
    cfg = load_config(path)
    assert cfg.tests == ["smoke:test_one"]
    assert cfg.search_paths == []
    assert cfg.print_error_messages is True


def test_relative_search_paths_resolve_against_config_dir(tmp_yaml, tmp_path):
    path = tmp_yaml("""\
        search_paths:
          - ./scripts
          - /opt/absolute
        tests:
          - smoke:test_one
    """)
    cfg = load_config(path)
    assert cfg.search_paths == [
        str((tmp_path / "scripts").resolve()),
        "/opt/absolute",
    ]


def test_search_paths_expand_env(tmp_yaml, monkeypatch):
    monkeypatch.setenv("HOSTCHECK_TEST_ROOT", "/srv/tests")
    path = tmp_yaml("""\
        search_paths:
          - ${HOSTCHECK_TEST_ROOT}/scripts
          - ${HOSTCHECK_UNSET_WITH_DEFAULT:-/srv/fallback}
        tests:
          - smoke:test_one
    """)
    cfg = load_config(path)
    assert cfg.search_paths == ["/srv/tests/scripts", "/srv/fallback"]


def test_search_paths_unset_variable_rejected(monkeypatch):
    monkeypatch.delenv("HOSTCHECK_NOT_SET", raising=False)
    with pytest.raises(ValidationError, match="HOSTCHECK_NOT_SET"):
        RunConfig(tests=["smoke:test_one"], search_paths=["${HOSTCHECK_NOT_SET}/x"])


def test_print_error_messages_flag(tmp_yaml):
    path = tmp_yaml("""\
        print_error_messages: false
        tests:
          - smoke:test_one
    """)
    assert load_config(path).print_error_messages is False


def test_empty_tests_rejected():
    with pytest.raises(ValidationError, match="must not be empty"):
        RunConfig(tests=[])


def test_malformed_target_rejected():
    with pytest.raises(ValidationError, match="module:function"):
        RunConfig(tests=["smoke.test_one"])


def test_unknown_key_rejected():
    with pytest.raises(ValidationError):
        RunConfig(tests=["smoke:test_one"], parallel=4)


def test_non_mapping_yaml_rejected(tmp_yaml):
    path = tmp_yaml("""\
        - smoke:test_one
    """)
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("smoke:test_one", True),
        ("pkg.smoke:test_one", True),
        ("smoke", False),
        ("smoke:", False),
        (":test_one", False),
        ("smoke:test-one", False),
    ],
)
def test_is_target(value, expected):
    assert is_target(value) is expected
