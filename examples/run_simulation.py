import logging

from irrigsim.io.loader import load_config
from irrigsim.sim.factory import SimulatorFactory
from irrigsim.viz.charts import plot_trajectory

logging.basicConfig(level=logging.INFO, format="%(message)s")

# Load simulation configuration from YAML file
config = load_config("config/default.yaml")
print("Simulation configuration loaded successfully.")

simulator = SimulatorFactory.create_simulator(config, narrate=True)
trajectory = simulator.run()

summary = trajectory.summary()
print(f"Valve open for {summary.irrigation_hours:g} h, {summary.valve_switches} switches.")

df = trajectory.to_dataframe()
print(df.head(10))

fig = plot_trajectory(trajectory, config)
fig.savefig("irrigation_simulation.png")
print("Chart saved to irrigation_simulation.png")
