from datetime import datetime, timezone

import pytest

from mirrorseek.models import Mirror, VideoQuality


def test_video_quality_ordering():
    assert (
        VideoQuality.DEFAULT
        < VideoQuality.LOW
        < VideoQuality.MEDIUM
        < VideoQuality.HIGH
        < VideoQuality.UHD
    )
    assert max(VideoQuality) == VideoQuality.UHD
    assert sorted([VideoQuality.HIGH, VideoQuality.LOW, VideoQuality.UHD]) == [
        VideoQuality.LOW,
        VideoQuality.HIGH,
        VideoQuality.UHD,
    ]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("high", VideoQuality.HIGH),
        ("1080p", VideoQuality.HIGH),
        ("UHD", VideoQuality.UHD),
        (" 480p ", VideoQuality.LOW),
        ("default", VideoQuality.DEFAULT),
    ],
)
def test_video_quality_parse(text, expected):
    assert VideoQuality.parse(text) == expected


def test_video_quality_parse_unknown():
    with pytest.raises(ValueError):
        VideoQuality.parse("8k")


def test_torrent_helpers(make_torrent):
    torrent = make_torrent(
        size=1_572_864,
        seeders=12,
        leeches=3,
        mirror_url="https://tpb.example/",
        torrent_url="/torrent/42/Some_Movie",
    )

    assert torrent.full_url == "https://tpb.example/torrent/42/Some_Movie"
    assert torrent.peers_string == "12 / 15"
    assert torrent.size_formatted == "1.5 GB"
    assert make_torrent(size=512).size_formatted == "512.0 KB"


def test_torrent_to_dict_schema(make_torrent):
    uploaded = datetime(2024, 2, 28, 10, 15, tzinfo=timezone.utc)
    data = make_torrent(quality=VideoQuality.UHD, upload_time=uploaded).to_dict()

    assert list(data) == [
        "title",
        "size",
        "seeders",
        "leeches",
        "verified_uploader",
        "video_quality",
        "mirror_url",
        "torrent_url",
        "magnet",
        "upload_time",
        "uploader",
    ]
    assert data["video_quality"] == "2160p"
    assert data["upload_time"] == "2024-02-28T10:15:00+00:00"
    assert make_torrent().to_dict()["upload_time"] is None


def test_torrent_is_immutable(make_torrent):
    torrent = make_torrent()
    with pytest.raises(AttributeError):
        torrent.size = 0


def test_mirror_to_dict():
    mirror = Mirror("https://tpb.example", "UK", True)
    assert mirror.to_dict() == {"url": "https://tpb.example", "country": "UK", "status": True}
    assert Mirror("https://tpb.example").status is False
