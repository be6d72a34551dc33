"""
Command-line front end for the transform engine.

Each sub-command reads an input matrix (an image, or a raw-text .dat/.txt
matrix), runs one transform and writes the result. Integer results go to an
image when the output path has an image extension, everything else is written
as a raw-text matrix.

Usage (from project root):
python -m scripts.transform_cli threshold data/lena.png results/lena_thr.png 50 200
python -m scripts.transform_cli fft2Dmag data/lena.png results/lena_mag.dat --plot results/plots
python -m scripts.transform_cli lowpass data/lena.png results/lena_low.png 30
"""

import argparse
import logging
import sys
from typing import Callable, Dict, Optional, Sequence

import numpy as np

from transforms.exceptions import TransformError
from transforms.fft_engine import DEFAULT_STEP, FFT1D, FFT2D, InverseFFT1D, InverseFFT2D
from transforms.filters import HighpassFilter, LowpassFilter
from transforms.pointwise import Histogram, Thresholding
from io_utils.file_utils import load_matrix, make_result_filename, write_matrix
from io_utils.image_handler import is_image_path, normalize_to_uint8, save_image
from io_utils.log_utils import setup_logging
from visuals.plots import compare_and_save, plot_magnitude_spectrum, plot_mask

logger = logging.getLogger("transform_cli")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


# --- output ---
def write_output(path: str, matrix: np.ndarray) -> str:
    if not is_image_path(path):
        return write_matrix(path, matrix)
    if np.issubdtype(matrix.dtype, np.integer):
        return save_image(path, matrix)
    # real / complex results are stretched for display
    return save_image(path, normalize_to_uint8(matrix, log_scale=np.iscomplexobj(matrix)))


def _plot_path(args, suffix: str) -> str:
    return make_result_filename(args.input, f"{args.command}_{suffix}", ext="png", outdir=args.plot)


# --- commands ---
def run_threshold(args) -> np.ndarray:
    return Thresholding(args.min, args.max).transform(load_matrix(args.input))


def run_histogram(args) -> np.ndarray:
    return Histogram().transform(load_matrix(args.input))


def _run_forward(transform_cls, want_magnitude: bool):
    def run(args) -> np.ndarray:
        fft = transform_cls(args.step)
        fft.transform(load_matrix(args.input))
        if args.plot:
            logger.info("Spectrum plot: %s", plot_magnitude_spectrum(fft.frequency, out_path=_plot_path(args, "spectrum")))
        return fft.magnitude if want_magnitude else fft.frequency
    return run


def _run_inverse(transform_cls):
    def run(args) -> np.ndarray:
        return transform_cls().transform(load_matrix(args.input, dtype="complex"))
    return run


def _run_filter(filter_cls):
    def run(args) -> np.ndarray:
        item = load_matrix(args.input)
        flt = filter_cls(args.cutoff, step=args.step)
        out = flt.transform(item)
        if args.plot:
            plot_magnitude_spectrum(flt.masked_spectrum(item), out_path=_plot_path(args, "spectrum"))
            plot_mask(flt.mask(item.shape), out_path=_plot_path(args, "mask"))
            compare_and_save(item, out, out_path=_plot_path(args, "compare"), titles=("Original", flt.name))
            logger.info("Plots written to %s", args.plot)
        return out
    return run


COMMANDS: Dict[str, Callable] = {
    "threshold": run_threshold,
    "histogram": run_histogram,
    "fft1Dfreq": _run_forward(FFT1D, want_magnitude=False),
    "fft1Dmag": _run_forward(FFT1D, want_magnitude=True),
    "ifft1D": _run_inverse(InverseFFT1D),
    "fft2Dfreq": _run_forward(FFT2D, want_magnitude=False),
    "fft2Dmag": _run_forward(FFT2D, want_magnitude=True),
    "ifft2D": _run_inverse(InverseFFT2D),
    "lowpass": _run_filter(LowpassFilter),
    "highpass": _run_filter(HighpassFilter),
}


# --- parser ---
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="img-transform",
        description="Thresholding, histogram, FFT and spectral filters over integer images/signals.",
    )
    parser.add_argument("--log-level", default="INFO", choices=LOG_LEVELS, help="logging verbosity")
    parser.add_argument("--log-file", default=None, help="also append log records to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    def add(name: str, help_text: str, step: bool = False, plot: bool = False):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("input", help="input image or raw-text matrix")
        p.add_argument("output", nargs="?", default=None,
                       help="output path (default: <input stem>_<command>.dat)")
        if step:
            p.add_argument("--step", type=int, default=DEFAULT_STEP, help="FFT stride multiplier")
        if plot:
            p.add_argument("--plot", default=None, metavar="DIR", help="write spectrum/mask PNGs to DIR")
        return p

    p = add("threshold", "clamp values into [min, max]")
    p.add_argument("min", type=int)
    p.add_argument("max", type=int)
    add("histogram", "fraction of cells per value")
    for name in ("fft1Dfreq", "fft1Dmag", "fft2Dfreq", "fft2Dmag"):
        add(name, "forward FFT ({})".format("magnitude" if name.endswith("mag") else "frequency"), step=True, plot=True)
    add("ifft1D", "inverse 1-D FFT of a complex matrix")
    add("ifft2D", "inverse 2-D FFT of a complex matrix")
    for name in ("lowpass", "highpass"):
        p = add(name, f"ideal {name} filter around the index-grid center", step=True, plot=True)
        p.add_argument("cutoff", type=float, help="cutoff radius in index units")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_file=args.log_file, level=getattr(logging, args.log_level))
    if args.output is None:
        args.output = make_result_filename(args.input, args.command)

    logger.info("Running %s on %s", args.command, args.input)
    try:
        result = COMMANDS[args.command](args)
        write_output(args.output, result)
    except (TransformError, ValueError, OSError) as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    logger.info("Done: %s -> %s", args.command, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
