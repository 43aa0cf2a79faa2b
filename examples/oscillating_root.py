from chain_sim import ChainModel, HarmonicOscillation, VelocityVerlet, zigzag_layout
import numpy as np

# Shake the root on a small horizontal ellipse near the chain's lowest mode
chain = ChainModel(gravity=(0.0, 9.8, 0.0), segments=[(0.2, 0.5), (0.3, 1.0), (0.2, 0.5)])
root = HarmonicOscillation(a=(0.03, 0.0, 0.0), b=(0.0, 0.0, 0.03), omega=5.0)

positions = zigzag_layout(root.x(0.0), chain.rod_lengths, angle_deg=5.0)
velocities = np.tile(root.v(0.0), (len(chain), 1))

t = 0.0
integrator = VelocityVerlet()
for frame in range(120):
    t = chain.tick(integrator, t, t + 1 / 60, root, positions, velocities)
    if frame % 30 == 29:
        print(f"t={t:5.2f}s  tip={positions[-1]}  KE={chain.kinetic_energy(velocities):.4f} J")
