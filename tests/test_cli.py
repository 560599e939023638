import logging

import pytest

from remote_pictures import cli
from remote_pictures.sync import run_sync

CONFIG = """\
collections:
  - id: gallery
    pictures:
      - id: hero
        url: https://example.com/hero.jpg
"""


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def project(tmp_path, monkeypatch, session):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MODE", raising=False)
    (tmp_path / "remote-pictures.yml").write_text(CONFIG, encoding="utf-8")
    session.add("https://example.com/hero.jpg")
    seen = []

    def fake_run_sync(config):
        seen.append(config)
        return run_sync(config, session=session)

    monkeypatch.setattr(cli, "run_sync", fake_run_sync)
    return tmp_path, seen


def test_parse_args_defaults():
    args = cli.parse_args([])
    assert str(args.config) == "remote-pictures.yml"
    assert args.force_refresh is False
    assert args.dev is False


def test_skip_cache_is_an_alias_for_force_refresh():
    assert cli.parse_args(["--skip-cache"]).force_refresh is True
    assert cli.parse_args(["--force-refresh"]).force_refresh is True


def test_main_syncs_default_config(project):
    root, seen = project
    assert cli.main([]) == 0
    assert (root / "public/remote/gallery-hero.jpg").exists()
    assert (root / "node_modules/remote-pictures/gallery.js").exists()
    assert (root / "node_modules/remote-pictures/gallery.d.ts").exists()
    assert seen[0].force_refresh is False
    assert seen[0].dev_mode is False


def test_main_passes_flags_to_config(project):
    _, seen = project
    assert cli.main(["--force-refresh", "--dev", "--quiet"]) == 0
    assert seen[0].force_refresh is True
    assert seen[0].dev_mode is True


def test_main_reads_mode_from_environment(project, monkeypatch):
    _, seen = project
    monkeypatch.setenv("MODE", "development")
    assert cli.main([]) == 0
    assert seen[0].dev_mode is True


def test_main_reports_bad_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bad.yml").write_text("collections: {}\n", encoding="utf-8")
    assert cli.main(["bad.yml"]) == 1


def test_main_reports_malformed_url(project):
    root, _ = project
    (root / "remote-pictures.yml").write_text(
        "collections:\n  - id: c\n    pictures:\n      - id: a\n        url: a.png\n",
        encoding="utf-8",
    )
    assert cli.main([]) == 1


def test_main_reports_unparseable_url(project):
    root, _ = project
    (root / "remote-pictures.yml").write_text(
        "collections:\n  - id: c\n    pictures:\n      - id: a\n"
        "        url: https://[::1/x.png\n",
        encoding="utf-8",
    )
    assert cli.main([]) == 1


def test_main_reports_unsupported_download_option(project):
    root, seen = project
    (root / "remote-pictures.yml").write_text(
        CONFIG + "download_options:\n  method: POST\n", encoding="utf-8"
    )
    assert cli.main([]) == 1
    assert seen == []
