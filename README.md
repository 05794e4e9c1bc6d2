# dvtoolbox

Tools for working with Digital Video (DV) metadata in the IEC 61834-2 format. Many consumer
camcorders record in this format.

The package covers two areas:

- **File metadata** (`dvtoolbox.file_info`): you describe a DV file by its size, video frame
  rate, video duration and audio layout. Validating that description gives the derived values
  that fix the layout of the file: the frame count, the frame size, the number of channels, the
  number of DIF sequences, and the DV system (525-60 or 625-50).
- **Subcode packs** (`dvtoolbox.packs`): decode the 4 data bytes of a DV pack into a Python
  object, validate it, and encode it back to bytes. The supported packs are binary groups
  (`BinaryGroup`), AAUX source (`AAUXSource`), AAUX source control (`AAUXSourceControl`) and
  recording dates (`RecordingDate`).

## Installing

```
pip install .
```

The package uses only the standard library. To run the tests, install the `test` extra and run
pytest:

```
pip install ".[test]"
pytest
```

## File metadata

```python
from fractions import Fraction

from dvtoolbox.file_info import Info

info = Info(
    file_size=600_000,
    video_frame_rate=Fraction(30_000, 1_001),
    video_duration=Fraction(1_001 * 5, 30_000),
    audio_stereo_stream_count=2,
    audio_sample_rate=32_000,
).validate()

info.video_frame_count()              # 5
info.video_frame_size()               # 120000
info.video_frame_channel_count()      # 1
info.video_frame_dif_sequence_count() # 10
info.system()                         # System.SYS_525_60, printed as "525-60"
info.ideal_audio_samples_per_frame()  # Fraction(16016, 15)
```

Validation checks the following:

- The frame rate must be exactly 30000/1001 or 25.
- The file size divided by the frame count must give a supported DV frame size.
- There can be 0 to 2 audio stereo streams.
- A sample rate of 32000, 44100 or 48000 Hz must be given if and only if there are audio streams.

`Info.validate` returns a `ValidInfo`. If any check fails, it raises
`dvtoolbox.validation.ValidationError` instead. The error's `errors` attribute holds every
failing field as `(field, message)` pairs, sorted by field name.

`ValidInfo.check_similar(other)` raises `DissimilarError` when the two descriptions differ in
anything other than the file size. This helps you notice when the format changes partway through
a recording.

## Packs

Every pack type is a subclass of `dvtoolbox.packs.base.PackData`. The methods take the 4 pack
data bytes, without the header byte, and a `PackContext` that holds the `ValidInfo` of the file:

- `decode(raw, ctx)` parses the bytes and validates the result.
- `from_raw(raw, ctx)` parses the bytes without validating.
- `validate(ctx)` returns the pack, or raises `ValidationError`.
- `to_raw(ctx)` validates the pack, then encodes it back to 4 bytes.

```python
from dvtoolbox.packs.base import PackContext
from dvtoolbox.packs.date import RecordingDate

ctx = PackContext(file_info=info)
date = RecordingDate.decode(bytes.fromhex("D9E76897"), ctx)
date.date      # datetime.date(1997, 8, 27)
date.weekday   # Weekday.WED
date.to_raw(ctx) == bytes.fromhex("D9E76897")  # True
```

Decoding can fail in three ways:

- It raises `RawPackError` when the bytes cannot be read, for example an unknown sample-rate code
  or an invalid binary-coded decimal digit.
- `decode` raises `PackValidationError`, a subclass of `RawPackError`, when the bytes can be read
  but the values fail validation.
- It raises `ValueError` when the input is not exactly 4 bytes.

`dvtoolbox.packs.aaux_source_control.valid_playback_speeds()` returns the set of playback speeds
that the AAUX source control pack can store.

`RecordingDate.to_dict` and `RecordingDate.from_dict` convert a recording date to and from plain
data. In that form the time zone is an offset in seconds.

## Other helpers

- `dvtoolbox.rational.AVRational` holds a rational with 32-bit signed parts. It converts to and
  from `fractions.Fraction` and checks the ranges of the parts. On failure it raises
  `DenominatorZeroError` or `RationalRangeError`.
- `dvtoolbox.ioutil.retry_if_interrupted(func)` calls `func` again whenever it raises
  `InterruptedError`.

## What the package does not do

The package does not open, read or write DV files. It does not find the packs inside a frame.
The caller has to supply the values for `Info` and the raw pack bytes.