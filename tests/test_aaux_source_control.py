from dataclasses import replace
from fractions import Fraction

import pytest

from dvtoolbox.file_info import Info
from dvtoolbox.packs.aaux_source_control import (
    AAUXInsertChannel,
    AAUXRecordingMode,
    AAUXSourceControl,
    Direction,
    valid_playback_speeds,
)
from dvtoolbox.packs.base import PackContext
from dvtoolbox.packs.common import (
    CompressionCount,
    CopyProtection,
    InputSource,
    SourceSituation,
)
from dvtoolbox.validation import ValidationError

NTSC = PackContext(
    file_info=Info(
        file_size=600_000,
        video_frame_rate=Fraction(30_000, 1_001),
        video_duration=Fraction(1_001 * 5, 30_000),
        audio_stereo_stream_count=2,
        audio_sample_rate=32_000,
    ).validate()
)

BASE = AAUXSourceControl(
    copy_protection=CopyProtection.NO_RESTRICTION,
    source_situation=None,
    input_source=InputSource.ANALOG,
    compression_count=CompressionCount.COMPRESSED_1,
    recording_start_point=False,
    recording_end_point=False,
    recording_mode=AAUXRecordingMode.ORIGINAL,
    insert_channel=None,
    genre_category=None,
    direction=Direction.FORWARD,
    playback_speed=Fraction(1),
    reserved=1,
)

ALL_CLEAR = AAUXSourceControl(
    copy_protection=CopyProtection.NO_RESTRICTION,
    source_situation=SourceSituation.SCRAMBLED_SOURCE_WITH_AUDIENCE_RESTRICTIONS,
    input_source=InputSource.ANALOG,
    compression_count=CompressionCount.COMPRESSED_1,
    recording_start_point=True,
    recording_end_point=True,
    recording_mode=AAUXRecordingMode.RESERVED_0,
    insert_channel=AAUXInsertChannel.CHANNEL_1,
    genre_category=0x00,
    direction=Direction.REVERSE,
    playback_speed=Fraction(0),
    reserved=0,
)


def data(hex_pack: str) -> bytes:
    """Pack data bytes from a spaced hex string that starts with the header byte."""
    return bytes.fromhex(hex_pack)[1:]


BINARY_CASES = {
    "basic_success_first_audio_block": ("51 03 CF A0 FF", BASE),
    "basic_success_second_empty_audio_block": (
        "51 03 FF A0 FF",
        replace(BASE, recording_mode=AAUXRecordingMode.INVALID_RECORDING),
    ),
    "stopped_playback_speed": ("51 03 CF 80 FF", replace(BASE, playback_speed=Fraction(0))),
    "super_slow_1_16_playback_speed": (
        "51 03 CF 81 FF",
        replace(BASE, playback_speed=Fraction(1, 32)),
    ),
    "x_0_and_1_4_playback_speed": (
        "51 03 CF 8E FF",
        replace(BASE, playback_speed=Fraction(1, 4)),
    ),
    "x_1_2_and_3_32_playback_speed": (
        "51 03 CF 93 FF",
        replace(BASE, playback_speed=Fraction(19, 32)),
    ),
    "x_32_and_28_playback_speed": (
        "51 03 CF FE FF",
        replace(BASE, playback_speed=Fraction(60)),
    ),
    "unknown_playback_speed": ("51 03 CF FF FF", replace(BASE, playback_speed=None)),
    "various_values_1": (
        "51 0A 8D 20 7F",
        replace(
            BASE,
            source_situation=SourceSituation.SOURCE_WITH_AUDIENCE_RESTRICTIONS,
            compression_count=CompressionCount.COMPRESSED_3_OR_MORE,
            recording_end_point=True,
            insert_channel=AAUXInsertChannel.CHANNELS_3_4,
            direction=Direction.REVERSE,
            reserved=0,
        ),
    ),
    "various_values_2": (
        "51 93 6F C3 AA",
        replace(
            BASE,
            copy_protection=CopyProtection.ONE_GENERATION_ONLY,
            input_source=InputSource.DIGITAL,
            recording_start_point=True,
            recording_mode=AAUXRecordingMode.TWO_CHANNEL_INSERT,
            genre_category=0x2A,
            playback_speed=Fraction(4) + Fraction(3, 4),
        ),
    ),
    "all_bits_set": (
        "51 FF FF FF FF",
        replace(
            BASE,
            copy_protection=CopyProtection.NOT_PERMITTED,
            input_source=None,
            compression_count=None,
            recording_mode=AAUXRecordingMode.INVALID_RECORDING,
            playback_speed=None,
        ),
    ),
    "all_bits_clear": ("51 00 00 00 00", ALL_CLEAR),
}


@pytest.mark.parametrize("hex_pack,expected", BINARY_CASES.values(), ids=BINARY_CASES.keys())
def test_decode(hex_pack, expected):
    assert AAUXSourceControl.decode(data(hex_pack), NTSC) == expected


@pytest.mark.parametrize("hex_pack,expected", BINARY_CASES.values(), ids=BINARY_CASES.keys())
def test_to_raw_round_trip(hex_pack, expected):
    assert expected.to_raw(NTSC) == data(hex_pack)


VALIDATION_CASES = {
    "invalid_genre_category": (
        replace(ALL_CLEAR, genre_category=0x7F),
        "genre_category: instead of specifying Some(0x7F), use None to indicate "
        "no information\n",
    ),
    "invalid_playback_speed": (
        replace(ALL_CLEAR, genre_category=None, playback_speed=Fraction(99, 100)),
        "playback_speed: playback speed 99/100 not supported: only playback speeds "
        "returned by the valid_playback_speeds function are supported\n",
    ),
}


@pytest.mark.parametrize("value,message", VALIDATION_CASES.values(), ids=VALIDATION_CASES.keys())
def test_validation_failure(value, message):
    with pytest.raises(ValidationError) as excinfo:
        value.validate(NTSC)
    assert str(excinfo.value) == message


def test_to_raw_rejects_invalid_pack():
    with pytest.raises(ValidationError):
        replace(BASE, playback_speed=Fraction(99, 100)).to_raw(NTSC)


def test_valid_pack_validates_to_itself():
    assert BASE.validate(NTSC) is BASE


def test_valid_playback_speeds_bounds():
    speeds = valid_playback_speeds()
    assert len(speeds) == 127
    assert min(speeds) == Fraction(0)
    assert max(speeds) == Fraction(60)


@pytest.mark.parametrize(
    "speed",
    [Fraction(1, 32), Fraction(1, 16), Fraction(1, 3), Fraction(1, 2), Fraction(31, 32),
     Fraction(1), Fraction(19, 32), Fraction(19, 4), Fraction(31), Fraction(58)],
)
def test_valid_playback_speeds_contains(speed):
    assert speed in valid_playback_speeds()


@pytest.mark.parametrize("speed", [Fraction(99, 100), Fraction(62), Fraction(1, 17)])
def test_valid_playback_speeds_excludes(speed):
    assert speed not in valid_playback_speeds()


def test_every_valid_speed_round_trips():
    for speed in valid_playback_speeds():
        pack = replace(BASE, playback_speed=speed)
        assert AAUXSourceControl.decode(pack.to_raw(NTSC), NTSC).playback_speed == speed