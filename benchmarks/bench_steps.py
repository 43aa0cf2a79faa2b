"""
Microbenchmark: time per tick vs number of segments.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from chain_sim import ChainModel, FixedPoint, Profiler, RK4, zigzag_layout

def run(n: int, ticks: int = 10):
    prof = Profiler()
    chain = ChainModel(
        gravity=(0.0, 9.8, 0.0),
        segments=[(0.3, 1.0)] * n,
        profiler=prof,
    )

    positions = zigzag_layout((0.0, 0.0, 0.0), chain.rod_lengths)
    velocities = np.zeros_like(positions)
    root = FixedPoint()
    integrator = RK4()

    # warmup
    t = chain.tick(integrator, 0.0, 1 / 60, root, positions, velocities)

    t0 = time.perf_counter()
    for _ in range(ticks):
        t = chain.tick(integrator, t, t + 1 / 60, root, positions, velocities)
    t1 = time.perf_counter()

    per_tick = (t1 - t0) / ticks
    return per_tick, prof.stats.summary()

if __name__ == "__main__":
    for n in [2, 4, 8, 16, 32]:
        per_tick, summary = run(n)
        print(f"N={n:4d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}")
        if "integrate" in summary:
            print("  integrate", summary["integrate"])
        print()
