import json
import sys

import pytest

import main
from mirrorseek.models import Mirror
from mirrorseek.sources import FixtureScraper


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "config.yaml")


@pytest.fixture
def fixture_mirror(monkeypatch, search_html):
    monkeypatch.setattr(
        main, "PirateBayScraper", lambda url: FixtureScraper(url, page=search_html)
    )


def run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["mirrorseek", *argv])
    main.main()


def test_mirrors_json(monkeypatch, capsys, config_path):
    monkeypatch.setattr(
        main.MirrorDirectory,
        "get_mirrors",
        lambda self: [Mirror("https://tpb.example", "US", True)],
    )

    run(monkeypatch, "--config", config_path, "mirrors", "--json")

    assert json.loads(capsys.readouterr().out) == [
        {"url": "https://tpb.example", "country": "US", "status": True}
    ]


def test_search_on_given_mirror(monkeypatch, capsys, config_path, fixture_mirror):
    run(
        monkeypatch,
        "--config", config_path,
        "search", "movie", "name",
        "--mirror", "https://tpb.example",
        "--verified",
        "--json",
    )

    results = json.loads(capsys.readouterr().out)
    assert [r["uploader"] for r in results] == ["uhdguy", "webgroup", "dvdking"]
    assert all(r["mirror_url"] == "https://tpb.example" for r in results)


def test_search_quality_and_limit(monkeypatch, capsys, config_path, fixture_mirror):
    run(
        monkeypatch,
        "--config", config_path,
        "search", "movie", "name",
        "--mirror", "https://tpb.example",
        "--quality", "1080p",
        "-n", "1",
    )

    out = capsys.readouterr().out
    assert "[1] Movie Name 2020 1080p WEBRip x264 [1080p]" in out
    assert "[2]" not in out


def test_bare_query_defaults_to_search(monkeypatch, capsys, config_path, fixture_mirror):
    monkeypatch.setenv("MIRRORSEEK_CONFIG", config_path)
    run(monkeypatch, "other", "--mirror", "https://tpb.example", "--json")

    assert len(json.loads(capsys.readouterr().out)) == 6


def test_movie_per_quality(monkeypatch, capsys, config_path, fixture_mirror):
    run(
        monkeypatch,
        "--config", config_path,
        "movie", "Movie", "Name",
        "--year", "2020",
        "--mirror", "https://tpb.example",
        "--json",
    )

    results = json.loads(capsys.readouterr().out)
    assert [r["video_quality"] for r in results] == ["2160p", "1080p", "720p", "480p"]


def test_malformed_size_fails_before_network(monkeypatch, capsys, config_path):
    def unexpected(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(main, "PirateBayScraper", unexpected)
    monkeypatch.setattr(main.MirrorDirectory, "get_mirrors", unexpected)

    with pytest.raises(SystemExit) as exc_info:
        run(monkeypatch, "--config", config_path, "search", "x", "--min-size", "lots")

    assert exc_info.value.code == 1
    assert "Invalid size" in capsys.readouterr().err


def test_bare_query_after_global_options(monkeypatch, capsys, config_path, fixture_mirror):
    run(monkeypatch, "-v", "--config", config_path, "other", "--mirror", "https://tpb.example", "--json")

    assert len(json.loads(capsys.readouterr().out)) == 6


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["ubuntu"], ["search", "ubuntu"]),
        (["-v", "ubuntu"], ["-v", "search", "ubuntu"]),
        (["--config", "c.yaml", "ubuntu"], ["--config", "c.yaml", "search", "ubuntu"]),
        (["--config=c.yaml", "-v", "ubuntu"], ["--config=c.yaml", "-v", "search", "ubuntu"]),
        (["-v", "mirrors"], ["-v", "mirrors"]),
        (["--config", "search"], ["--config", "search"]),
        (["-v"], ["-v"]),
        (["--help"], ["--help"]),
    ],
)
def test_insert_default_command(argv, expected):
    full = ["mirrorseek", *argv]
    main.insert_default_command(full)
    assert full[1:] == expected
