from chain_sim import ChainModel, FixedPoint, RK4, zigzag_layout
from chain_sim.core.invariants import rod_lengths
import numpy as np

chain = ChainModel(gravity=(0.0, 9.8, 0.0), segments=[(0.3, 1.0)] * 4)

root = FixedPoint((0.0, 0.0, 0.0))
positions = zigzag_layout((0.0, 0.0, 0.0), chain.rod_lengths)
velocities = np.zeros_like(positions)

t = 0.0
for _ in range(60):
    t = chain.tick(RK4(), t, t + 1 / 60, root, positions, velocities)

energy = chain.potential_energy(positions) + chain.kinetic_energy(velocities)
print("tip position:", positions[-1], "energy:", energy)
print("rod lengths:", rod_lengths(root.x(t), positions))
