import numpy as np
import pytest
from transforms.exceptions import (
    InvalidArgumentError, InvalidShapeError, NotComputedYetError
)
from transforms.base import TransformState
from transforms.fft_engine import (
    fft_radix2, normalize, fft1d, ifft1d, fft2d, ifft2d,
    FFT1D, InverseFFT1D, FFT2D, InverseFFT2D, magnitude_spectrum
)

ITEM = np.array([[11, 12], [21, 22]])


def test_radix2_matches_numpy():
    x = np.arange(8, dtype=complex)
    buf = x.copy()
    fft_radix2(buf, 0, 7, 1, -1)
    assert np.allclose(buf, np.fft.fft(x))

def test_radix2_inverse_direction_is_unnormalized():
    x = np.random.rand(16) + 1j * np.random.rand(16)
    buf = x.copy()
    fft_radix2(buf, 0, 15, 1, 1)
    assert np.allclose(buf, np.fft.ifft(x) * 16)

def test_radix2_strided_slice_only():
    x = np.arange(8, dtype=complex)
    buf = x.copy()
    fft_radix2(buf, 1, 7, 2, -1)
    assert np.allclose(buf[1::2], np.fft.fft(x[1::2]))
    assert np.array_equal(buf[0::2], x[0::2])  # untouched

def test_radix2_length_one_is_noop():
    buf = np.array([5 + 2j])
    fft_radix2(buf, 0, 0, 1, -1)
    assert buf[0] == 5 + 2j

def test_radix2_validation():
    buf = np.zeros(6, dtype=complex)
    with pytest.raises(InvalidShapeError):
        fft_radix2(buf, 0, 5, 1, -1)
    with pytest.raises(InvalidArgumentError):
        fft_radix2(np.zeros(4, dtype=complex), 0, 3, 1, 0)
    with pytest.raises(InvalidShapeError):
        fft_radix2(np.zeros(8, dtype=complex), 0, 7, 1, -1, scratch=np.zeros(4, dtype=complex))

def test_normalize_in_place():
    buf = np.array([2 + 4j, 6 + 0j])
    out = normalize(buf, 2.0)
    assert out is buf
    assert np.allclose(buf, [1 + 2j, 3 + 0j])
    with pytest.raises(InvalidArgumentError):
        normalize(buf, 0)


# --- 1-D ---
def test_fft1d_known_values():
    F = fft1d(ITEM).frequency
    assert F.shape == (1, 4)
    assert np.allclose(F[0], [33, -5 + 5j, -1, -5 - 5j])

def test_fft1d_matches_numpy_ortho():
    M = np.random.randint(-50, 50, size=(4, 8))
    F = fft1d(M).frequency
    assert np.allclose(F[0], np.fft.fft(M.ravel(), norm="ortho"))

def test_fft1d_step_decimates():
    M = np.arange(8).reshape(2, 4)
    F = fft1d(M, step=2).frequency[0]
    expected = M.ravel().astype(complex)
    expected[0::2] = np.fft.fft(expected[0::2])
    expected /= np.sqrt(8)
    assert np.allclose(F, expected)

def test_fft1d_roundtrip():
    M = np.random.randint(0, 256, size=(8, 16))
    back = ifft1d(fft1d(M).frequency)
    assert back.shape == (1, 128)
    assert np.array_equal(back[0], M.ravel())

def test_fft1d_rejects_non_power_of_two():
    with pytest.raises(InvalidShapeError):
        fft1d(np.zeros((2, 3), dtype=int))
    with pytest.raises(InvalidShapeError):
        fft1d(np.zeros((2, 4), dtype=int), step=3)
    with pytest.raises(ValueError):
        fft1d(np.zeros((0, 0), dtype=int))

def test_fft1d_class_lifecycle():
    fft = FFT1D()
    assert fft.state is TransformState.NOT_COMPUTED
    with pytest.raises(NotComputedYetError):
        fft.get_magnitude()
    with pytest.raises(RuntimeError):
        fft.frequency
    F = fft.transform(ITEM)
    assert fft.computed
    assert np.allclose(fft.magnitude[0], [33, np.sqrt(50), 1, np.sqrt(50)])
    assert np.all(fft.magnitude.imag == 0)
    assert fft.frequency is F

def test_fft_class_step_validation():
    with pytest.raises(InvalidArgumentError):
        FFT1D(0)
    with pytest.raises(InvalidArgumentError):
        FFT2D(1.5)

def test_inverse1d_usable_without_forward_call():
    out = InverseFFT1D().transform(np.array([[33, -5 + 5j, -1, -5 - 5j]]))
    assert np.array_equal(out, [[11, 12, 21, 22]])

def test_ifft1d_warns_on_imag_residue():
    with pytest.warns(RuntimeWarning):
        ifft1d(np.array([[1j, 0, 0, 0]]), suppress_warning=False)


# --- 2-D ---
def test_fft2d_known_values():
    F = fft2d(ITEM).frequency
    assert F.shape == (2, 2)
    assert np.allclose(F, [[33, -1], [-10, 0]])

def test_fft2d_matches_numpy_ortho():
    M = np.random.randint(0, 256, size=(8, 4))
    F = fft2d(M).frequency
    assert np.allclose(F, np.fft.fft2(M, norm="ortho"))

def test_fft2d_step_applies_to_rows_only():
    M = np.random.randint(0, 10, size=(4, 4))
    F = fft2d(M, step=2).frequency
    buf = M.astype(complex)
    buf[:, 0::2] = np.fft.fft(buf[:, 0::2], axis=1)
    expected = np.fft.fft(buf, axis=0) / 4.0
    assert np.allclose(F, expected)

def test_fft2d_roundtrip_rectangular():
    M = np.random.randint(-1000, 1000, size=(16, 32))
    back = ifft2d(fft2d(M).frequency)
    assert back.shape == M.shape
    assert np.array_equal(back, M)

def test_fft2d_rejects_non_power_of_two():
    with pytest.raises(InvalidShapeError):
        fft2d(np.zeros((4, 6), dtype=int))
    with pytest.raises(InvalidShapeError):
        ifft2d(np.zeros((3, 4), dtype=complex))
    with pytest.raises(InvalidShapeError):
        fft2d(np.zeros((4, 4, 3), dtype=int))

def test_fft2d_class_caches_magnitude():
    fft = FFT2D()
    with pytest.raises(NotComputedYetError):
        fft.magnitude
    F = fft.transform(ITEM)
    assert np.allclose(fft.magnitude, np.abs(F))
    assert np.array_equal(InverseFFT2D().transform(F), ITEM)

def test_fft_does_not_mutate_input():
    M = np.random.randint(0, 100, size=(4, 4))
    keep = M.copy()
    fft2d(M)
    fft1d(M)
    assert np.array_equal(M, keep)
    F = fft2d(M).frequency
    Fk = F.copy()
    ifft2d(F)
    assert np.array_equal(F, Fk)

def test_magnitude_spectrum_display_options():
    F = fft2d(np.random.randint(0, 256, size=(16, 16))).frequency
    mag = magnitude_spectrum(F, log=True)
    assert mag.shape == F.shape
    assert np.isrealobj(mag) and np.all(mag >= 0)
    assert np.allclose(magnitude_spectrum(F, log=False), np.abs(F))
    shifted = magnitude_spectrum(F, shift=True, log=False)
    assert np.isclose(shifted[8, 8], abs(F[0, 0]))

def test_radix2_accepts_whole_float_stride():
    x = np.arange(8, dtype=complex)
    buf = x.copy()
    fft_radix2(buf, 0, 7, 2.0, -1)
    assert np.allclose(buf[0::2], np.fft.fft(x[0::2]))
    with pytest.raises(InvalidArgumentError):
        fft_radix2(buf, 0, 7, 1.5, -1)

def test_fft2d_large_matches_numpy():
    M = np.random.randint(0, 256, size=(128, 256))
    F = fft2d(M).frequency
    assert np.allclose(F, np.fft.fft2(M, norm="ortho"))
    assert np.array_equal(ifft2d(F), M)
    F2 = fft2d(M, step=4).frequency
    buf = M.astype(complex)
    buf[:, 0::4] = np.fft.fft(buf[:, 0::4], axis=1)
    assert np.allclose(F2, np.fft.fft(buf, axis=0) / np.sqrt(M.size))
