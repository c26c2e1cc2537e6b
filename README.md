# silentlsb

Tools for hiding data inside media files.

- **WAVE audio** (complete). The payload goes into the low bits of PCM
  samples (8, 16 or 32 bits per sample). A 32-bit size header is placed at
  the start or at the end of the stream. The payload is written either
  inline or spread evenly over the file ("equi").
- **Images** (building blocks only). These tools convert pixels to YCbCr,
  group them into 8×8 blocks, and adjust a block's mean luminance. Stego
  tables derived from a passphrase map a block's mean luminance to a
  hidden bit.

## Installation

```
pip install silentlsb
```

Pillow is the only runtime dependency.

## Hiding data in a WAVE file

`silentlsb.wavformat.WavFormat` hands out `AudioWav` objects. Each one is
already configured from the format's encode or decode options.

```python
from silentlsb.wavformat import WavFormat

fmt = WavFormat()
print(fmt.name(), fmt.version(), fmt.type_supported())

wav = fmt.encode_audio("song.wav")
print("capacity in bytes:", wav.capacity)
written = wav.save_to_dir("out", b"hello")   # returns the path written

stego = fmt.decode_audio(written)
payload = stego.load_data()                   # b"hello"
```

### Behaviour of `save_to_dir()`

- The output directory must already exist.
- The output file gets the source's name with a `.wav` suffix. If a file of
  that name is already there, the name is prefixed with `_`.
- A `str` payload is encoded as UTF-8.
- After writing, the `AudioWav` object reads from the new file.

### Using `silentlsb.audiowav.AudioWav` directly

These settings are plain properties:

- `nb_bits_used` takes a value from 1 to 8.
- `nb_channel_used` is clamped to the file's channel count.
- `header_position` takes a `HeaderPosition` (`BEGINNING` or `ENDING`).
- `distribution` takes a `DataDistribution` (`INLINE` or `EQUI`).

These properties are read-only: `capacity`, `num_channels`,
`bits_per_sample`, `frame_rate`, `sample_count` and `file_path`.

### Errors

Failures raise `silentlsb.errors.ModuleError`, which has a `message` and a
`details` attribute. This covers:

- unreadable or unwritable files,
- unsupported sample widths,
- payloads larger than the capacity,
- a size header that cannot be read or exceeds the capacity when loading.

## Audio options

`silentlsb.wavoptions.WavOptions(max_channels=2)` holds the settings for
one run. It has these properties:

| Property | Values | Default |
|---|---|---|
| `nb_bits` | 1 to 8 | 2 |
| `channels` | 1 to `max_channels` | `max_channels` |
| `distribution` | a `DataDistribution` member or its name in any case | `EQUI` |
| `header_position` | a `HeaderPosition` member or its name in any case | `ENDING` |

Invalid values raise `ValueError`.

The options also report the resulting quality:

- `quality_percent` estimates how much of the sound is left untouched.
- `quality_level` gives that estimate as a `QualityLevel` (`LOW`, `NORMAL`
  or `HIGH`).

`set_quality_level()` applies a preset and accepts a `QualityLevel`, its
integer value, or its name:

| Level | Channels | Bits | Header |
|---|---|---|---|
| `LOW` | 2 | 5 | `BEGINNING` |
| `NORMAL` | 2 | 3 | `ENDING` |
| `HIGH` | 1 | 1 | `ENDING` |

### Change notifications

Callbacks registered with `subscribe()` are called with no arguments after
every change. `WavFormat.subscribe()` passes on changes to the encode
options only.

## Image building blocks

```python
from PIL import Image
from silentlsb.ycbcr import YCbCr
from silentlsb.stegotable import StegoTable
from silentlsb.groupedimage import GroupedImage, compact_image

color = YCbCr.from_rgb((200, 120, 40))
print(color, color.to_rgb())

table = StegoTable("secret", 20)
bit = table.compute_value(118.0, False)
new_miv = table.compute_new_miv(118.0, not bit)

img = Image.open("picture.png").convert("RGB")
compact_image(img, 5)              # luminance squeezed into 5 .. 250, in place
grouped = GroupedImage(img, 5)
block = grouped.pixel_group(0, 0)
block.update_miv_to(100.0)
print(block.miv)
rebuilt = grouped.to_image()
```

### `YCbCr`

Two `YCbCr` values compare equal when their rounded luminances match.

### `StegoTable`

- The interval length `k` must be between 1 and 255.
- An empty passphrase falls back to a built-in key.
- `compute_new_miv()` raises `ModuleError` if no suitable interval is
  found.

### `GroupedImage` and `PixelGroup`

- `GroupedImage` exposes `width` and `height`, measured in blocks, and
  `initial_width` and `initial_height`, measured in pixels.
- `PixelGroup.update_miv_to()` raises `ValueError` for targets outside
  0 to 255.
- `compact_image()` accepts only RGB and RGBA images.

### Image options

`silentlsb.jpegoptions.JpegOptions` holds image settings:

| Setting | Range | Default |
|---|---|---|
| `k` | within `k_range` | 20, clamped to `k_range` |
| `quality` | within `quality_range` | top of `quality_range` |
| `passphrase` | any string | empty |
| `header_position` | `JpegHeaderPosition`: `TOP`, `BOTTOM` or `SIGNATURE` | `SIGNATURE` |

The default ranges are `k_range=(5, 20)` and `quality_range=(1, 100)`.

## What this package does not do

- There is no complete image encoder or decoder. Nothing here writes a
  payload into an image file or reads one back; `JpegOptions` is not used
  by any other part of the package.
- There is no command-line tool and no graphical interface. Everything is
  used from Python.
- There is no configuration file: options start from the defaults above.

## Running the tests

```
pip install "silentlsb[test]"
pytest
```