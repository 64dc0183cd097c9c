import json

import pytest

from github_api import GitHubError
from tmg.cli import build_parser, main
from tmg.commands import generate as cmd_generate


def _make_repo(root):
    arch_dir = root / "dists" / "zsync-update" / "main" / "binary-amd64"
    arch_dir.mkdir(parents=True)
    (arch_dir / "Packages").write_bytes(b"Package: zsync\nVersion: 0.6.2-1\n\n")
    return root


def _read_manifest(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_generate_without_fetch(tmp_path):
    root = _make_repo(tmp_path)
    main(["generate", "-d", str(root), "-p", "AOSC-Dev/aosc-os-abbs", "--no-fetch", "--show"])

    data = _read_manifest(root / "manifest" / "topics.json")
    assert len(data) == 1
    assert data[0]["name"] == "zsync-update"
    assert data[0]["description"] is None
    assert data[0]["architectures"] == ["amd64"]
    assert data[0]["packages"] == ["zsync"]


def test_generate_with_descriptions(tmp_path, monkeypatch):
    root = _make_repo(tmp_path)
    seen = {}

    def fake_fetch(repo, settings):
        seen["repo"] = repo
        seen["base"] = settings.base_branch
        return {"zsync-update": "Update zsync"}

    monkeypatch.setattr(cmd_generate, "fetch_descriptions", fake_fetch)
    out = tmp_path / "out.json"
    main(["generate", "-d", str(root), "-p", "o/r", "--base", "testing", "-o", str(out)])

    assert seen == {"repo": "o/r", "base": "testing"}
    assert _read_manifest(out)[0]["description"] == "Update zsync"


def test_generate_survives_fetch_failure(tmp_path, monkeypatch):
    root = _make_repo(tmp_path)

    def failing_fetch(repo, settings):
        raise GitHubError("boom")

    monkeypatch.setattr(cmd_generate, "fetch_descriptions", failing_fetch)
    main(["generate", "-d", str(root), "-p", "o/r"])
    assert _read_manifest(root / "manifest" / "topics.json")[0]["description"] is None


def test_generate_without_dists(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["generate", "-d", str(tmp_path), "-p", "o/r", "--no-fetch"])
    assert exc.value.code == 1


def test_names_command(tmp_path, capsys):
    path = tmp_path / "Packages"
    path.write_bytes(b"Package: zsync\nVersion: 1\n\nPackage: rsync\nVersion: 2\n\ntrailing")
    main(["names", str(path)])
    out = capsys.readouterr().out
    assert "zsync" in out
    assert "rsync" in out
    assert "8 bajtów" in out

    main(["names", str(path), "--field", "Version"])
    out = capsys.readouterr().out
    assert "1\n2\n" in out


def test_describe_command(tmp_path, capsys):
    path = tmp_path / "body.md"
    path.write_bytes(b"Topic Description\n---\n\n[new] zsync\n\nPackage(s) Affected\n")
    main(["describe", str(path)])
    assert "[new] zsync" in capsys.readouterr().out

    path.write_bytes(b"no template here")
    with pytest.raises(SystemExit):
        main(["describe", str(path)])


def test_generate_with_bad_timeout_exits_cleanly(tmp_path, monkeypatch, capsys):
    root = _make_repo(tmp_path)
    monkeypatch.setenv("TMG_HTTP_TIMEOUT", "abc")

    with pytest.raises(SystemExit) as exc:
        main(["generate", "-d", str(root), "-p", "o/r"])

    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert "TMG_HTTP_TIMEOUT" in out
    assert not (root / "manifest" / "topics.json").exists()
