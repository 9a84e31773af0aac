import sys
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

sys.path.append(str(Path(__file__).resolve().parents[1]))

from mem.kinematics import FourVector
from mem.modules import flat_transfer_function_on_theta

N = 200_000


def main():
    rng = np.random.default_rng(42)
    reco = FourVector.from_spherical(10.0, 6.0, 1.0, 0.5)

    theta = np.empty(N)
    weight = np.empty(N)
    for i, u in enumerate(rng.random(N)):
        out, w = flat_transfer_function_on_theta(float(u), reco)
        theta[i] = out.theta
        weight[i] = w

    plt.figure(figsize=(7, 5))
    plt.hist(theta, bins=60, weights=np.sin(theta) * weight / N, alpha=0.8,
             label=r"generated, weighted by $\pi \sin\theta$")
    grid = np.linspace(0.0, np.pi, 200)
    width = np.pi / 60
    plt.plot(grid, np.sin(grid) * width, "k--", label=r"$\sin\theta\,\Delta\theta$")
    plt.xlabel(r"$\theta$ [rad]")
    plt.ylabel("Weighted counts per bin")
    plt.title("Flat transfer function on theta")
    plt.grid(alpha=0.3)
    plt.legend()
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
