import json
import logging
import os

import pytest

from pathexclude.config import load_config, load_exclusions, load_from_config
from pathexclude.errors import ConfigIOError, SettingsError

pytestmark = pytest.mark.skipif(os.sep != "/", reason="POSIX path semantics")


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_resolves_paths_against_config_dir(tmp_path):
    cfg_path = _write(
        tmp_path / "pathexclude.yaml",
        "exclude:\n"
        "  file: conf/exclude.json\n"
        "  base_dir: src\n"
        "  on_match_error: RAISE\n"
        "logging:\n"
        "  level: debug\n"
        "  file: logs/pathexclude.log\n",
    )
    cfg = load_config(cfg_path)
    assert cfg.exclude.file == tmp_path / "conf" / "exclude.json"
    assert cfg.exclude.base_dir == tmp_path / "src"
    assert cfg.exclude.on_match_error == "raise"
    assert cfg.logging.level == "debug"
    assert cfg.logging.file == tmp_path / "logs" / "pathexclude.log"


def test_load_config_defaults(tmp_path):
    cfg = load_config(_write(tmp_path / "pathexclude.yaml", ""))
    assert cfg.exclude.file == tmp_path / "exclude.json"
    assert cfg.exclude.base_dir is None
    assert cfg.exclude.on_match_error == "skip"
    assert cfg.logging.level == "info"
    assert cfg.logging.file is None


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigIOError):
        load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "exclude: [1, 2]\n",
        "exclude:\n  on_match_error: panic\n",
        "exclude: {file: [\n",
    ],
)
def test_load_config_rejects_invalid_settings(tmp_path, text):
    with pytest.raises(SettingsError):
        load_config(_write(tmp_path / "pathexclude.yaml", text))


def test_load_from_config_builds_exclusion_set(tmp_path):
    _write(tmp_path / "exclude.json", json.dumps({"testdata/*.go": "Tracked in issue #42"}))
    cfg = load_config(_write(tmp_path / "pathexclude.yaml", "exclude:\n  base_dir: /repo\n"))
    exclusions = load_from_config(cfg)
    assert exclusions.excluded("/repo/testdata/a.go")
    assert not exclusions.excluded(str(tmp_path / "testdata" / "a.go"))


def test_load_exclusions_configures_logging_from_settings(tmp_path, restore_root_logger):
    _write(tmp_path / "exclude.json", json.dumps({"/repo/*.go": "generated"}))
    cfg_path = _write(
        tmp_path / "pathexclude.yaml",
        "logging:\n  level: warning\n  file: logs/pathexclude.log\n",
    )
    exclusions = load_exclusions(cfg_path)
    assert exclusions.excluded("/repo/a.go")
    assert restore_root_logger.level == logging.WARNING
    assert (tmp_path / "logs" / "pathexclude.log").exists()


def test_load_exclusions_can_leave_logging_alone(tmp_path, restore_root_logger):
    _write(tmp_path / "exclude.json", "{}")
    before = list(restore_root_logger.handlers)
    exclusions = load_exclusions(_write(tmp_path / "pathexclude.yaml", ""), setup_logging=False)
    assert len(exclusions) == 0
    assert restore_root_logger.handlers == before
