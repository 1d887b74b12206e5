"""
End-to-end tests for the pipeline driver and the command line interface.
"""

import io
import sys

import pytest
import numpy as np


def make_raster(width, height, color=(255, 0, 0, 255)):
    raster = np.zeros((height, width, 4), dtype=np.uint8)
    raster[:, :] = color
    return raster


@pytest.fixture
def red_square():
    """100x100 fully opaque red square."""
    return make_raster(100, 100)


class TestPipeline:
    """Tests for run_pipeline()."""

    def test_red_square_scenario(self, red_square):
        from roundshadow.pipeline import run_pipeline
        from roundshadow.core.config import PipelineConfig, ShadowParams

        config = PipelineConfig(
            radius=10,
            shadow=ShadowParams(offset_x=-20, offset_y=-20, alpha=150, spread=26),
        )
        result = run_pipeline(red_square, config)
        canvas = result.image
        height, width = canvas.shape[:2]

        assert width > 100 + 26 * 2 + 20
        assert height > 100 + 26 * 2 + 20
        for y, x in [(0, 0), (0, -1), (-1, 0), (-1, -1)]:
            assert canvas[y, x, 3] == 0

        sx, sy = result.layout.source_origin
        assert np.all(canvas[sy + 20:sy + 80, sx + 20:sx + 80] == (255, 0, 0, 255))

    def test_shadow_shows_around_source(self, red_square):
        """Shadow pixels are visible next to the source in the offset direction."""
        from roundshadow.pipeline import run_pipeline

        result = run_pipeline(red_square)
        sx, sy = result.layout.source_origin
        # just left of the source, inside the shadow shifted up and left
        pixel = result.image[sy + 50, sx - 5]
        assert pixel[3] > 0
        assert tuple(pixel[:3]) == (0, 0, 0)

    def test_intermediate_layers(self, red_square):
        from roundshadow.pipeline import run_pipeline
        from roundshadow.processing import round_corners

        result = run_pipeline(red_square)
        assert np.array_equal(result.rounded, round_corners(red_square, 8))
        assert not result.shadow[:, :, :3].any()
        assert result.size == result.layout.canvas_size

    def test_oversized_radius(self):
        """A radius larger than the image makes a lens, not an error."""
        from roundshadow.pipeline import run_pipeline
        from roundshadow.core.config import PipelineConfig

        src = make_raster(40, 24, (0, 128, 255, 255))
        result = run_pipeline(src, PipelineConfig(radius=500))
        assert result.rounded[0, 0, 3] == 0
        assert result.rounded[12, 20, 3] == 255
        assert result.image.shape[2] == 4

    @pytest.mark.parametrize("offset", [(0, 0), (-50, -50), (50, -50)])
    def test_offsets_do_not_clip(self, red_square, offset):
        """The source appears unclipped for any offset."""
        from roundshadow.pipeline import run_pipeline
        from roundshadow.core.config import PipelineConfig, ShadowParams

        config = PipelineConfig(radius=0, shadow=ShadowParams(offset_x=offset[0],
                                                              offset_y=offset[1]))
        result = run_pipeline(red_square, config)
        sx, sy = result.layout.source_origin
        assert np.array_equal(result.image[sy:sy + 100, sx:sx + 100], red_square)

    def test_edge_fade_changes_output(self, red_square):
        from roundshadow.pipeline import run_pipeline
        from roundshadow.core.config import PipelineConfig, ShadowParams

        plain = run_pipeline(red_square)
        faded = run_pipeline(red_square, PipelineConfig(shadow=ShadowParams(edge_fade=True)))
        assert faded.image.shape == plain.image.shape
        assert not np.array_equal(faded.image, plain.image)
        assert int(faded.image[:, :, 3].sum()) < int(plain.image[:, :, 3].sum())

        sx, sy = plain.layout.source_origin
        # opaque middle of the source is unaffected
        assert np.array_equal(faded.image[sy + 10:sy + 90, sx + 10:sx + 90],
                              plain.image[sy + 10:sy + 90, sx + 10:sx + 90])

    def test_empty_image(self):
        from roundshadow.pipeline import run_pipeline
        from roundshadow.core.errors import InvalidDimensions

        with pytest.raises(InvalidDimensions):
            run_pipeline(np.zeros((0, 0, 4), dtype=np.uint8))

    def test_bad_blur_in_config(self, red_square):
        from roundshadow.pipeline import run_pipeline
        from roundshadow.core.config import PipelineConfig, ShadowParams
        from roundshadow.core.errors import BlurParameterOutOfRange

        config = PipelineConfig(shadow=ShadowParams(blur_radius=-2))
        with pytest.raises(BlurParameterOutOfRange):
            run_pipeline(red_square, config)

    def test_process_bytes(self):
        from roundshadow.pipeline import process_bytes, run_pipeline
        from roundshadow.core.image_io import encode_png, decode_image

        src = make_raster(30, 20, (40, 50, 60, 255))
        output = process_bytes(encode_png(src))
        decoded = decode_image(output)
        assert np.array_equal(decoded, run_pipeline(src).image)


class TestCLI:
    """Tests for the command line interface."""

    def _write_input(self, tmp_path, width=30, height=20):
        from roundshadow.core.image_io import save_png

        path = tmp_path / "input.png"
        save_png(path, make_raster(width, height, (10, 200, 30, 255)))
        return path

    def test_file_to_file(self, tmp_path, capsys):
        from roundshadow.__main__ import main
        from roundshadow.core.image_io import load_image

        src = self._write_input(tmp_path)
        out = tmp_path / "output.png"
        code = main(['-i', str(src), '-o', str(out), '-r', '4',
                     '--offset=5,5', '-a', '100', '-s', '3'])
        assert code == 0

        padding = 3 + 2 * 5
        image = load_image(out)
        assert image.shape == (20 + 5 + 2 * padding, 30 + 5 + 2 * padding, 4)
        assert "saved as" in capsys.readouterr().err

    def test_verbose(self, tmp_path, capsys):
        from roundshadow.__main__ import main

        src = self._write_input(tmp_path)
        out = tmp_path / "output.png"
        assert main(['-i', str(src), '-o', str(out), '-v']) == 0
        err = capsys.readouterr().err
        assert "Debug: Guessed image format: png" in err
        assert "Debug: Image successfully decoded: 30x20" in err

    @pytest.mark.parametrize("flag,value", [
        ('--alpha', 'abc'),
        ('--alpha', '300'),
        ('--radius', '-1'),
        ('--spread', 'wide'),
        ('--offset', '1;2'),
    ])
    def test_invalid_flag(self, tmp_path, capsys, flag, value):
        """Invalid values are reported with the flag name."""
        from roundshadow.__main__ import main

        src = self._write_input(tmp_path)
        code = main(['-i', str(src), '-o', str(tmp_path / "out.png"), f'{flag}={value}'])
        assert code == 1
        err = capsys.readouterr().err
        assert err.startswith("Error:")
        assert flag in err
        assert not (tmp_path / "out.png").exists()

    @pytest.mark.parametrize("offset_args", [['--offset=-5,-5'], ['-e-5,-5']])
    def test_negative_offset_forms(self, tmp_path, offset_args):
        """Negative offsets are accepted when attached to the flag."""
        from roundshadow.__main__ import main
        from roundshadow.core.image_io import load_image

        src = self._write_input(tmp_path)
        out = tmp_path / "output.png"
        assert main(['-i', str(src), '-o', str(out)] + offset_args) == 0
        assert load_image(out).shape == (20 + 5 + 72, 30 + 5 + 72, 4)

    def test_edge_fade_flag(self, tmp_path):
        from roundshadow.__main__ import main
        from roundshadow.core.image_io import load_image

        src = self._write_input(tmp_path)
        plain, faded = tmp_path / "plain.png", tmp_path / "faded.png"
        assert main(['-i', str(src), '-o', str(plain)]) == 0
        assert main(['-i', str(src), '-o', str(faded), '--edge-fade']) == 0
        assert not np.array_equal(load_image(plain), load_image(faded))

    def test_missing_input(self, tmp_path, capsys):
        from roundshadow.__main__ import main

        code = main(['-i', str(tmp_path / "missing.png"), '-o', str(tmp_path / "out.png")])
        assert code == 1
        assert "Input file not found" in capsys.readouterr().err

    def test_undecodable_input(self, tmp_path, capsys):
        from roundshadow.__main__ import main

        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not an image at all")
        assert main(['-i', str(bad), '-o', str(tmp_path / "out.png")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_stdin_to_stdout(self, tmp_path, monkeypatch):
        from roundshadow.__main__ import main
        from roundshadow.core.image_io import decode_image, encode_png

        data = encode_png(make_raster(12, 12))
        stdout_buffer = io.BytesIO()
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))
        monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(stdout_buffer))

        assert main(['-r', '2']) == 0
        image = decode_image(stdout_buffer.getvalue())
        # default offset -20,-20, spread 26, blur 5: padding 36
        assert image.shape == (12 + 20 + 72, 12 + 20 + 72, 4)

    def test_empty_stdin(self, monkeypatch, capsys):
        from roundshadow.__main__ import main

        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"")))
        assert main([]) == 1
        assert "No input data received" in capsys.readouterr().err

    def test_config_file(self, tmp_path):
        from roundshadow.__main__ import main
        from roundshadow.core.config import PipelineConfig, ShadowParams
        from roundshadow.core.image_io import load_image

        config_path = tmp_path / "shadow.json"
        PipelineConfig(radius=2, shadow=ShadowParams(offset_x=0, offset_y=0, spread=0,
                                                     blur_radius=1)).save(config_path)
        src = self._write_input(tmp_path)
        out = tmp_path / "out.png"
        assert main(['-i', str(src), '-o', str(out), '-c', str(config_path)]) == 0
        assert load_image(out).shape == (20 + 4, 30 + 4, 4)

    def test_save_config(self, tmp_path):
        from roundshadow.__main__ import main
        from roundshadow.core.config import load_config

        src = self._write_input(tmp_path)
        saved = tmp_path / "effective.json"
        assert main(['-i', str(src), '-o', str(tmp_path / "o.png"),
                     '-a', '42', '--save-config', str(saved)]) == 0
        assert load_config(saved).shadow.alpha == 42

    def test_version(self, capsys):
        from roundshadow.__main__ import main
        from roundshadow import __version__

        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
