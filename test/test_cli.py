import os
import numpy as np
from io_utils.file_utils import write_matrix, read_matrix
from io_utils.image_handler import save_image, read_image
from scripts.transform_cli import main, build_parser

ITEM = np.array([[11, 12], [21, 22]])


def _write_item(tmp_path, M=ITEM, name="item.dat"):
    p = str(tmp_path / name)
    write_matrix(p, M)
    return p

def test_threshold_command(tmp_path):
    inp = _write_item(tmp_path)
    out = str(tmp_path / "thr.dat")
    assert main(["threshold", inp, out, "12", "21"]) == 0
    assert np.array_equal(read_matrix(out), [[12, 12], [21, 21]])

def test_threshold_bad_bounds_exit_code(tmp_path):
    inp = _write_item(tmp_path)
    assert main(["threshold", inp, str(tmp_path / "x.dat"), "5", "3"]) == 1

def test_histogram_command(tmp_path):
    inp = _write_item(tmp_path, np.array([[1, 1, 2, 3], [4, 4, 4, 4]]))
    out = str(tmp_path / "hist.dat")
    assert main(["histogram", inp, out]) == 0
    assert np.allclose(read_matrix(out, dtype="float"), [[0.25, 0.125, 0.125, 0.5]])

def test_fft2d_then_ifft2d_through_files(tmp_path):
    inp = _write_item(tmp_path)
    freq = str(tmp_path / "freq.dat")
    back = str(tmp_path / "back.dat")
    assert main(["fft2Dfreq", inp, freq]) == 0
    assert np.allclose(read_matrix(freq, dtype="complex"), [[33, -1], [-10, 0]])
    assert main(["ifft2D", freq, back]) == 0
    assert np.array_equal(read_matrix(back), ITEM)

def test_fft1d_magnitude_command(tmp_path):
    inp = _write_item(tmp_path)
    out = str(tmp_path / "mag.dat")
    assert main(["fft1Dmag", inp, out, "--step", "1"]) == 0
    mag = read_matrix(out, dtype="complex")
    assert np.allclose(mag.real, [[33, np.sqrt(50), 1, np.sqrt(50)]])

def test_filter_command_with_plots(tmp_path):
    inp = _write_item(tmp_path)
    out = str(tmp_path / "low.dat")
    plots = str(tmp_path / "plots")
    assert main(["lowpass", inp, out, "1", "--plot", plots]) == 0
    assert np.array_equal(read_matrix(out), [[-6, -5], [5, 6]])
    assert sorted(os.listdir(plots)) == [
        "item_lowpass_compare.png", "item_lowpass_mask.png", "item_lowpass_spectrum.png"
    ]

def test_filter_on_image(tmp_path):
    M = np.random.randint(0, 256, size=(8, 8))
    inp = str(tmp_path / "img.png")
    save_image(inp, M)
    out = str(tmp_path / "img_high.png")
    assert main(["highpass", inp, out, "0.5"]) == 0
    res, _ = read_image(out)
    assert res.shape == (8, 8)

def test_non_power_of_two_exit_code(tmp_path):
    inp = _write_item(tmp_path, np.zeros((3, 4), dtype=int))
    assert main(["fft2Dfreq", inp, str(tmp_path / "f.dat")]) == 1

def test_default_output_name(tmp_path, monkeypatch):
    inp = _write_item(tmp_path)
    monkeypatch.chdir(tmp_path)
    assert main(["lowpass", inp, "5"]) == 0
    assert np.array_equal(read_matrix(str(tmp_path / "item_lowpass.dat")), ITEM)

def test_parser_lists_all_commands():
    parser = build_parser()
    args = parser.parse_args(["highpass", "a.dat", "b.dat", "2.5", "--step", "2"])
    assert args.cutoff == 2.5 and args.step == 2
