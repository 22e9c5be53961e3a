from __future__ import annotations

import pytest
import typer

from wfv.cli.context import CLIContext
from wfv.core.config import Config, FixVersionConfig
from wfv.core.errors import ErrorCode
from wfv.core.result import Err, Ok, Result
from wfv.output.console import MockConsole, Style
from wfv.services.fixversion import BranchCatalog, FixVersionError, build_catalog


def _run(
    monkeypatch: pytest.MonkeyPatch,
    result: Result[BranchCatalog, FixVersionError],
    config: Config | None = None,
) -> MockConsole:
    import wfv.cli.commands.releases_cmd as releases_cmd
    import wfv.cli.prompt as prompt

    console = MockConsole()
    ctx = CLIContext(
        config=config or Config(url="https://example.invalid/x.git"),
        config_path=None,
        console=console,
    )

    class FakeService:
        def catalog(self, config: FixVersionConfig) -> Result[BranchCatalog, FixVersionError]:
            assert config.commit_ref == ""
            return result

    monkeypatch.setattr(releases_cmd, "build_context", lambda *_a, **_k: ctx)
    monkeypatch.setattr(releases_cmd, "FixVersionService", FakeService)
    monkeypatch.setattr(prompt, "is_interactive_terminal", lambda: False)

    releases_cmd.releases(
        url=None,
        remote=None,
        release_identifier=None,
        no_fetch=False,
        cache_dir=None,
        config=None,
        verbose=False,
    )
    return console


def test_lists_newest_first(monkeypatch: pytest.MonkeyPatch) -> None:
    catalog = build_catalog(
        ["release/1.0", "release/2.0", "release/1.10", "develop"], ("release",)
    )

    console = _run(monkeypatch, Ok(catalog))

    rows = [o.message for o in console.outputs if o.style is Style.DEFAULT]
    assert [row.split()[1] for row in rows] == ["release/2.0", "release/1.10", "release/1.0"]
    assert console.find("3 release branches")
    assert console.statuses == ["Reading branches of origin..."]


def test_warns_when_nothing_matches(monkeypatch: pytest.MonkeyPatch) -> None:
    console = _run(
        monkeypatch,
        Ok(BranchCatalog()),
        Config(url="https://example.invalid/x.git", release_identifiers=("rel", "hotfix")),
    )

    assert console.messages == ["warning: no release branches match: rel, hotfix"]


def test_error_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    error = FixVersionError(kind="fetch_failed", message="could not fetch origin")

    with pytest.raises(typer.Exit) as exc:
        _run(monkeypatch, Err(error))

    assert exc.value.exit_code == int(ErrorCode.NETWORK_ERROR)


def test_url_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(typer.Exit) as exc:
        _run(monkeypatch, Ok(BranchCatalog()), Config())

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
