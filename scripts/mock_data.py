import numpy as np
import pandas as pd
from pathlib import Path

rng = np.random.default_rng(0)

n_discs = 90
n_samples = 40
n_specimens = 60

conditions = np.array(["standard", "hypoxia", "cold"])

# --- per-disc scalar measurements (mergedNormalizedGrad.csv) ---
disc_ids = [f"disc_{i:03d}" for i in range(n_discs)]
disc_cond = rng.choice(conditions, size=n_discs)
area = rng.normal(loc=10.5, scale=0.4, size=n_discs)
lam = 0.15 + 0.02 * (area - 10.5) + rng.normal(scale=0.01, size=n_discs)

morph = pd.DataFrame(
    {
        "disc": disc_ids,
        "area": area,
        "A": rng.normal(size=n_discs),
        "B": rng.normal(size=n_discs),
        "C": rng.normal(size=n_discs),
        "D": lam,
        "condition": disc_cond,
    }
)

# --- long-form raw profiles (mergedRawGrad.csv) ---
rows = []
distance = np.linspace(0, 1, n_samples)
for disc, cond, a, l in zip(disc_ids, disc_cond, area, lam):
    peak = rng.uniform(500, 2000)
    values = peak * np.exp(-np.abs(distance - 0.5) / l) + rng.normal(scale=20, size=n_samples)
    for d, v in zip(distance, values):
        rows.append({"disc": disc, "distance": d, "value": max(v, 0.0), "condition": cond, "area": a})
profiles = pd.DataFrame(rows)

# --- landmark coordinates (mergedWingCoords.csv) ---
template = rng.uniform(0, 1, size=(15, 2))
coords = {}
for i in range(1, 16):
    coords[f"X{i}"] = template[i - 1, 0] + rng.normal(scale=0.02, size=n_specimens)
    coords[f"Y{i}"] = template[i - 1, 1] + rng.normal(scale=0.02, size=n_specimens)
centroid = rng.normal(loc=1.0, scale=0.05, size=n_specimens)
landmarks = pd.DataFrame(
    {
        "Id": [f"wing_{i:03d}" for i in range(n_specimens)],
        "Condition": rng.choice(conditions, size=n_specimens),
        "Sex": rng.choice(["F", "M"], size=n_specimens),
        "Centroid Size": centroid,
        "Log Centroid Size": np.log(centroid),
        **coords,
    }
)

out = Path("data")
out.mkdir(exist_ok=True)
morph.to_csv(out / "mergedNormalizedGrad.csv", index=False)
profiles.to_csv(out / "mergedRawGrad.csv", index=False)
landmarks.to_csv(out / "mergedWingCoords.csv", index=False)
print("wrote", out, len(morph), "discs,", len(profiles), "profile rows,", len(landmarks), "specimens")
