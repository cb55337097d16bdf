"""Tests for bindata.discovery."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from bindata.discovery import InputConfig, find_assets, safe_function_name
from bindata.errors import BindataError, InputUnavailableError


def _write(path: Path, content: bytes = b"x") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("logo.png", "logoPng"),
        ("data/img/a.png", "dataImgAPng"),
        ("README.md", "readmeMd"),
        ("snake_case.txt", "snake_caseTxt"),
        ("2x/icon.svg", "_2xIconSvg"),
        ("func", "_func"),
        ("asset", "_asset"),
    ],
)
def test_safe_function_name_builds_go_identifiers(name: str, expected: str) -> None:
    assert safe_function_name(name, {}) == expected


def test_safe_function_name_disambiguates_collisions() -> None:
    known: dict[str, int] = {}
    assert safe_function_name("a.b", known) == "aB"
    assert safe_function_name("a-b", known) == "aB2"
    assert safe_function_name("a b", known) == "aB3"


def test_safe_function_name_skips_names_already_taken() -> None:
    known: dict[str, int] = {}
    assert safe_function_name("a.b2", known) == "aB2"
    assert safe_function_name("a.b", known) == "aB"
    assert safe_function_name("a-b", known) == "aB3"


def test_input_config_parses_recursive_suffix() -> None:
    assert InputConfig.parse("assets/...") == InputConfig(path="assets", recursive=True)
    assert InputConfig.parse("./assets/") == InputConfig(path="assets", recursive=False)


def test_find_assets_walks_recursively_in_sorted_order(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "web" / "index.html")
    _write(tmp_path / "web" / "css" / "site.css")
    _write(tmp_path / "web" / "app.js")

    toc = find_assets([InputConfig.parse("web/...")])

    assert [asset.name for asset in toc] == ["web/app.js", "web/css/site.css", "web/index.html"]
    assert [asset.func for asset in toc] == ["webAppJs", "webCssSiteCss", "webIndexHtml"]
    assert all(asset.path.is_absolute() for asset in toc)


def test_find_assets_without_recursion_skips_subdirectories(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "web" / "index.html")
    _write(tmp_path / "web" / "css" / "site.css")

    toc = find_assets([InputConfig.parse("web")])

    assert [asset.name for asset in toc] == ["web/index.html"]


def test_find_assets_strips_prefix(tmp_path: Path) -> None:
    root = tmp_path / "project"
    _write(root / "static" / "img" / "logo.png")

    toc = find_assets(
        [InputConfig(path=str(root / "static"), recursive=True)],
        prefix=str(root / "static"),
    )

    assert [asset.name for asset in toc] == ["img/logo.png"]
    assert toc[0].func == "imgLogoPng"


def test_find_assets_accepts_single_files(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "logo.png")

    toc = find_assets([InputConfig.parse("logo.png")])

    assert [(asset.name, asset.func) for asset in toc] == [("logo.png", "logoPng")]
    assert toc[0].path == tmp_path / "logo.png"


def test_find_assets_honours_ignore_patterns(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "web" / "index.html")
    _write(tmp_path / "web" / "index.html~")
    _write(tmp_path / "web" / ".git" / "HEAD")

    toc = find_assets([InputConfig.parse("web/...")], ignore=[r"~$", r"/\.git(/|$)"])

    assert [asset.name for asset in toc] == ["web/index.html"]


def test_find_assets_follows_directory_symlinks_once(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "web" / "a.txt")
    os.symlink(tmp_path / "web", tmp_path / "web" / "loop")

    toc = find_assets([InputConfig.parse("web/...")])

    assert [asset.name for asset in toc] == ["web/a.txt"]


def test_find_assets_reports_missing_input(tmp_path: Path) -> None:
    missing = tmp_path / "nope"
    with pytest.raises(InputUnavailableError) as excinfo:
        find_assets([InputConfig(path=str(missing))])

    assert excinfo.value.path == missing


def test_safe_function_name_keeps_derived_symbols_unique() -> None:
    known: dict[str, int] = {}
    assert safe_function_name("logo", known) == "logo"
    assert safe_function_name("logo_bytes", known) == "logo_bytes2"
    assert safe_function_name("_logo", known) == "_logo2"


def test_safe_function_name_avoids_generated_symbols() -> None:
    assert safe_function_name("bindata", {}) == "bindata2"
    assert safe_function_name("bintree", {}) == "_bintree2"


@pytest.mark.parametrize("name", ["error", "nil", "string", "len"])
def test_safe_function_name_does_not_shadow_predeclared_identifiers(name: str) -> None:
    assert safe_function_name(name, {}) == f"_{name}"


def test_find_assets_does_not_shadow_registry_package(tmp_path: Path) -> None:
    _write(tmp_path / "grate")

    toc = find_assets(
        [InputConfig(path=str(tmp_path / "grate"))], prefix=str(tmp_path), reserved=["grate"]
    )

    assert [asset.func for asset in toc] == ["_grate"]


def test_find_assets_embeds_repeated_input_once(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _write(tmp_path / "web" / "f.txt")
    _write(tmp_path / "web" / "g.txt")

    toc = find_assets(
        [InputConfig.parse("web/f.txt"), InputConfig.parse("web/f.txt"), InputConfig.parse("web")]
    )

    assert [asset.name for asset in toc] == ["web/f.txt", "web/g.txt"]


def test_find_assets_rejects_two_files_with_one_name(tmp_path: Path) -> None:
    _write(tmp_path / "a" / "b" / "logo.png")
    _write(tmp_path / "ab" / "logo.png")

    with pytest.raises(BindataError, match="b/logo.png"):
        find_assets(
            [
                InputConfig(path=str(tmp_path / "a"), recursive=True),
                InputConfig(path=str(tmp_path / "ab")),
            ],
            prefix=str(tmp_path / "a"),
        )
