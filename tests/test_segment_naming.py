import pytest

from audio_splitter.domain import SegmentWindow, derive_segment_key
from audio_splitter.domain.segment_naming import content_type_for, parse_locator, segment_metadata


@pytest.mark.parametrize(
    "source_key, index, expected",
    [
        ("meeting.mp3", 0, "meeting_segment_0.mp3"),
        ("folder/meeting.recording.mp3", 2, "folder/meeting.recording_segment_2.mp3"),
        ("uploads/2024/board-call.m4a", 1, "uploads/2024/board-call_segment_1.mp3"),
        ("no_extension", 3, "no_extension_segment_3.mp3"),
        ("dotted.dir/recording", 0, "dotted.dir/recording_segment_0.mp3"),
    ],
)
def test_derive_segment_key(source_key, index, expected):
    assert derive_segment_key(source_key, index) == expected


def test_derive_segment_key_uses_target_extension():
    assert derive_segment_key("call.wav", 4, "flac") == "call_segment_4.flac"


def test_segment_metadata_describes_window():
    window = SegmentWindow(index=1, start_seconds=12600, length_seconds=1800.5)

    assert segment_metadata("meeting.mp3", window) == {
        "original-file": "meeting.mp3",
        "segment-index": "1",
        "segment-start-time": "12600.0",
        "segment-duration": "1800.5",
    }


def test_content_type_for_known_and_unknown_codecs():
    assert content_type_for("mp3") == "audio/mpeg"
    assert content_type_for("ogg") == "audio/ogg"
    assert content_type_for("aiff") == "application/octet-stream"


def test_parse_locator():
    assert parse_locator("s3://recordings/folder/a_segment_0.mp3") == (
        "recordings",
        "folder/a_segment_0.mp3",
    )


@pytest.mark.parametrize("locator", ["https://host/a.mp3", "s3://bucket-only", "s3:///key"])
def test_parse_locator_rejects_malformed(locator):
    with pytest.raises(ValueError):
        parse_locator(locator)
