"""Tests for skylark.cli — entrypoint, app resolution and route listing."""

from pathlib import Path

import pytest

from skylark.app import App
from skylark.cli import main
from skylark.cli._resolve import resolve_app

APP_SOURCE = '''
from skylark import App

app = App()

def index():
    return "home"

app.route("GET /", index)

def create_app():
    return app

not_an_app = 42
'''


@pytest.fixture
def app_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "cli_fixture_app.py").write_text(APP_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return "cli_fixture_app"


class TestCLIHelp:
    def test_no_command_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0

    def test_run_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run"])
        assert exc_info.value.code == 2


class TestResolveApp:
    def test_default_attribute(self, app_module: str) -> None:
        assert isinstance(resolve_app(app_module), App)

    def test_factory(self, app_module: str) -> None:
        assert isinstance(resolve_app(f"{app_module}:create_app"), App)

    def test_not_an_app(self, app_module: str) -> None:
        with pytest.raises(TypeError, match="not a skylark.App"):
            resolve_app(f"{app_module}:not_an_app")


class TestRoutes:
    def test_lists_routes(self, app_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", app_module])
        out = capsys.readouterr().out
        assert "METHOD" in out
        assert "GET" in out
        assert "index" in out

    def test_bad_import_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "no_such_module_here"])
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err
