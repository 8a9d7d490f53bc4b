import json

from ffmeta.domain.entities.probe import RawProbeRecord
from ffmeta.domain.entities.streams import ClassifiedStream, NormalizedResult
from ffmeta.domain.enums import StreamCategory
from ffmeta.domain.policies.classifier import classify
from ffmeta.domain.policies.projector import project


def test_project_simple_mp4(simple_mp4_probe):
    flat = project(classify(RawProbeRecord.from_ffprobe_json(simple_mp4_probe)))

    assert flat == {
        "fileinfo/duration": "2",
        "fileinfo/formatName": "mov,mp4",
        "stream/0": '{"type":"video","codec":"h264","index":0,"width":320,"height":240}',
        "stream/1": '{"type":"audio","codec":"aac","index":1,"sampleRate":44100,"channelLayout":"stereo"}',
    }


def test_global_numbering_across_categories():
    raw = {
        "streams": [
            {"codec_type": "video", "codec_name": "h264"},
            {"codec_type": "audio", "codec_name": "aac"},
            {"codec_type": "data"},
            {"codec_type": "audio", "codec_name": "ac3"},
            {"codec_type": "subtitle", "codec_name": "mov_text"},
        ]
    }
    flat = project(classify(RawProbeRecord.from_ffprobe_json(raw)))

    assert sorted(flat) == ["stream/0", "stream/1", "stream/2", "stream/3"]
    types = [json.loads(flat[f"stream/{n}"])["type"] for n in range(4)]
    assert types == ["video", "audio", "audio", "subtitle"]
    assert json.loads(flat["stream/2"])["codec"] == "ac3"


def test_codec_type_is_not_projected(rich_mkv_probe):
    flat = project(classify(RawProbeRecord.from_ffprobe_json(rich_mkv_probe)))
    for key, value in flat.items():
        if key.startswith("stream/"):
            assert "codecType" not in json.loads(value)


def test_booleans_and_text_are_typed_in_records(rich_mkv_probe):
    flat = project(classify(RawProbeRecord.from_ffprobe_json(rich_mkv_probe)))
    subs = json.loads(flat["stream/2"])
    assert subs == {
        "type": "subtitle",
        "codec": "subrip",
        "index": 3,
        "forced": True,
        "default": False,
        "language": "ger",
        "title": "1984",
    }


def test_projection_is_idempotent(rich_mkv_probe):
    res = classify(RawProbeRecord.from_ffprobe_json(rich_mkv_probe))
    first = project(res)
    second = project(res)
    assert first == second
    assert list(first) == list(second)


def test_empty_result_projects_to_empty_map():
    assert project(NormalizedResult()) == {}


def test_unknown_fields_follow_known_ones():
    stream = ClassifiedStream(StreamCategory.audio, 0, {"zeta": "z", "codec": "aac", "alpha": 1})
    flat = project(NormalizedResult(streams=(stream,)))
    assert flat["stream/0"] == '{"type":"audio","codec":"aac","alpha":1,"zeta":"z"}'
