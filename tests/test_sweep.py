import numpy as np

from sweep import plot_heatmap, run_sweep


def test_grid_grows_with_size_and_speed():
    diameters, speeds, results = run_sweep(diameter_points=5, speed_points=4)
    assert results.shape == (4, 5)
    assert np.all(np.diff(results, axis=0) >= 0)
    assert np.all(np.diff(results, axis=1) >= 0)
    assert diameters[0] == 10.0 and diameters[-1] == 500.0


def test_heatmap_written(tmp_path):
    diameters, speeds, results = run_sweep(diameter_points=6, speed_points=5)
    out = plot_heatmap(diameters, speeds, results, tmp_path)
    assert out.exists()
    assert out.name == "yield_heatmap.png"
