from chain_sim import ChainSimulation
from chain_sim.logging_config import setup_logging
import numpy as np

setup_logging(level="INFO")

sim = ChainSimulation.default()
sim.tick(0.0)

# Drag the root along a circle for one second at 60 frames per second
for frame in range(1, 61):
    t = frame / 60
    target = 0.1 * np.array([np.cos(2 * np.pi * t) - 1.0, 0.0, np.sin(2 * np.pi * t)])
    sim.tick(t, root_target=target)

print("root:", sim.root_position, "tip:", sim.positions[-1])
print("energy / unit energy:", sim.total_energy() / sim.unit_energy())
print("max rod error:", sim.max_rod_error())
