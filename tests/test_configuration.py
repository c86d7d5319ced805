from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from resilience_core.errors import InvalidMethod, InvalidParameter, InvalidThreshold
from resilience_index.configuration import (
    ResilienceParameters,
    load_parameters,
    load_project_config,
)


def write_pyproject(directory: Path, contents: str) -> Path:
    """Persist a ``pyproject.toml`` under ``directory`` and return its path."""

    payload = dedent(contents).lstrip()
    target = directory / "pyproject.toml"
    target.write_text(payload, encoding="utf8")
    return target


def test_packaged_defaults_are_loaded_without_a_file() -> None:
    config = load_parameters()

    assert config["integral_method"] == 2
    assert config["logging"]["format"] == "text"


def test_explicit_file_is_merged_over_defaults(tmp_path: Path) -> None:
    target = tmp_path / "custom.yaml"
    target.write_text(
        dedent(
            """
            acceptable: 4.0
            worst: 0.0
            event_sep_time: 300
            signal_width: 300
            logging:
              level: debug
            """
        ),
        encoding="utf8",
    )

    config = load_parameters(target)

    assert config["acceptable"] == 4.0
    assert config["logging"] == {"level": "debug", "output": "stderr", "format": "text"}
    parameters = ResilienceParameters.from_mapping(config)
    assert parameters == ResilienceParameters(4.0, 0.0, 300.0, 300.0, 2)


def test_search_paths_resolve_directories(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    filled = tmp_path / "filled"
    filled.mkdir()
    (filled / "resilience.yaml").write_text("Pa: 2\nPmax: 0\n", encoding="utf8")

    config = load_parameters(search_paths=[empty, filled])

    assert config["Pa"] == 2


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_parameters(tmp_path / "absent.yaml")


def test_invalid_documents_are_rejected(tmp_path: Path) -> None:
    broken = tmp_path / "broken.yaml"
    broken.write_text("acceptable: [1, 2\n", encoding="utf8")
    listing = tmp_path / "list.yaml"
    listing.write_text("- 1\n- 2\n", encoding="utf8")

    with pytest.raises(ValueError):
        load_parameters(broken)
    with pytest.raises(TypeError):
        load_parameters(listing)


def test_from_mapping_accepts_r_style_names() -> None:
    parameters = ResilienceParameters.from_mapping(
        {"Pa": 2, "Pmax": 0, "evtSepTime": 60, "signalWidth": 60, "integral_method": 1}
    )

    assert parameters.acceptable == 2.0
    assert parameters.worst == 0.0
    assert parameters.integral_method == 1
    assert parameters.as_dict()["event_sep_time"] == 60.0


def test_from_mapping_reports_missing_fields() -> None:
    with pytest.raises(ValueError, match="event_sep_time, signal_width"):
        ResilienceParameters.from_mapping({"pa": 2.0, "pmax": 0.0})


def test_parameters_validate_their_values() -> None:
    with pytest.raises(InvalidThreshold):
        ResilienceParameters(1.0, 1.0, 0.0, 0.0)
    with pytest.raises(InvalidParameter):
        ResilienceParameters(2.0, 0.0, -1.0, 0.0)
    with pytest.raises(InvalidMethod):
        ResilienceParameters(2.0, 0.0, 1.0, 1.0, integral_method=4)


def test_project_config_reads_tool_section(tmp_path: Path) -> None:
    write_pyproject(
        tmp_path,
        """
        [tool.resilience_index]
        acceptable = 4.0
        worst = 0.0
        event_sep_time = 300
        signal_width = 300

        [tool.resilience_index.logging]
        format = "json"
        """,
    )

    loaded = load_project_config(tmp_path)

    assert loaded is not None
    config, source = loaded
    assert source == (tmp_path / "pyproject.toml").resolve()
    assert config["logging"] == {"format": "json"}
    assert ResilienceParameters.from_mapping(config).signal_width == 300.0


def test_project_config_without_section(tmp_path: Path) -> None:
    target = write_pyproject(tmp_path, "[tool.other]\nvalue = 1\n")

    assert load_project_config(target) is None
    assert load_project_config(tmp_path / "missing") is None
    assert load_project_config(tmp_path / "setup.cfg") is None


def test_project_config_rejects_invalid_toml(tmp_path: Path) -> None:
    write_pyproject(tmp_path, "[tool.resilience_index\n")

    with pytest.raises(ValueError):
        load_project_config(tmp_path)
