import pytest

from ffmeta.domain.enums import StreamCategory
from ffmeta.domain.policies.stream_tree import LayoutError, build_streams


def test_builds_typed_streams_by_slot():
    tree = {
        "video": {"0": {"codec": "h264", "index": "0", "width": "320", "forced": "false", "title": "1984"}},
        "audio": {"0": {"codec": "aac", "index": "1", "sampleRate": "44100"}},
    }

    out = build_streams(tree)

    assert sorted(out) == ["audio/0", "video/0"]
    video = out["video/0"]
    assert video.category is StreamCategory.video
    assert video.fields == {"codec": "h264", "index": 0, "width": 320, "forced": False, "title": "1984"}
    assert out["audio/0"].fields["sampleRate"] == 44100


@pytest.mark.parametrize(
    "tree",
    [
        {"bogus": {"0": {"codec": "x"}}},
        {"video": {"x": {"codec": "h264"}}},
        {"video": {"0": "h264"}},
        {"video": {"0": {"codec": {"name": "h264"}}}},
    ],
)
def test_strict_mode_rejects_bad_shapes(tree):
    with pytest.raises(LayoutError):
        build_streams(tree)


def test_lenient_mode_skips_bad_branches():
    out = build_streams(
        {
            "bogus": {"0": {"codec": "x"}},
            "video": {"x": {"codec": "h264"}},
            "audio": {"0": {"codec": "aac", "tags": ["a"]}},
        },
        strict=False,
    )
    assert list(out) == ["audio/0"]
    assert out["audio/0"].fields == {"codec": "aac"}
