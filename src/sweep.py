"""Parameter sweep of the TNT-equivalent yield over impactor size and speed."""
from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import LogNorm

from impact_sim.core.config import PARAMETER_CFG
from impact_sim.core.physics import compute_energy

# ===========================
# SWEEP SETTINGS
# ===========================
DIAMETER_RANGE = PARAMETER_CFG.diameter_range   # m
SPEED_RANGE = PARAMETER_CFG.speed_range         # km/s
DIAMETER_POINTS = 200                           # horizontal resolution (x-axis)
SPEED_POINTS = 90                               # vertical resolution (y-axis)

FIGURES_DIR = Path("figures")


# ===========================
# MAIN SWEEP
# ===========================
def run_sweep(
    diameter_points: int = DIAMETER_POINTS,
    speed_points: int = SPEED_POINTS,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Yield grid in megatons, indexed ``[speed, diameter]``."""
    diameters = np.linspace(*DIAMETER_RANGE, diameter_points)
    speeds = np.linspace(*SPEED_RANGE, speed_points)
    results = np.zeros((speeds.size, diameters.size), dtype=float)

    for i, speed in enumerate(speeds):
        for j, diameter in enumerate(diameters):
            results[i, j] = compute_energy(float(diameter), float(speed)).energy_megatons

    return diameters, speeds, results


# ===========================
# PLOTTING
# ===========================
def plot_heatmap(diameters: np.ndarray, speeds: np.ndarray, results: np.ndarray, out_dir: Path = FIGURES_DIR) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    positive = results[results > 0]
    vmin = float(positive.min()) if positive.size else 1e-3
    vmax = float(results.max()) if results.size else 1.0

    fig, ax = plt.subplots(figsize=(10, 6))
    extent = [diameters.min(), diameters.max(), speeds.min(), speeds.max()]
    im = ax.imshow(
        np.clip(results, vmin, None),
        origin="lower",
        extent=extent,
        aspect="auto",
        cmap="inferno",
        norm=LogNorm(vmin=vmin, vmax=max(vmax, vmin * 10)),
    )
    cbar = fig.colorbar(im)
    cbar.set_label("Yield [MT TNT]")
    levels = [lvl for lvl in (1, 10, 100, 1_000, 10_000) if vmin < lvl < vmax]
    if levels:
        contours = ax.contour(diameters, speeds, results, levels=levels, colors="white", linewidths=0.8)
        ax.clabel(contours, fmt="%g MT", fontsize=8)
    ax.set_xlabel("Diameter [m]")
    ax.set_ylabel("Speed [km/s]")
    ax.set_title("Impact yield by impactor diameter and speed")
    fig.tight_layout()
    out = out_dir / "yield_heatmap.png"
    fig.savefig(out, dpi=180)
    plt.close(fig)
    return out


# ===========================
# MAIN
# ===========================
def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--out-dir", type=Path, default=FIGURES_DIR)
    args = parser.parse_args(argv)

    print(f"\n--- Yield sweep: {DIAMETER_POINTS} diameters x {SPEED_POINTS} speeds ---")
    diameters, speeds, results = run_sweep()
    print(f"Yield range: {results.min():.2f} - {results.max():.2f} MT")
    out = plot_heatmap(diameters, speeds, results, args.out_dir)
    print(f"Heatmap saved to {out}")


if __name__ == "__main__":
    main()
