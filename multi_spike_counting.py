import numpy as np
import matplotlib.pyplot as plt
from matplotlib import rcParams
import configparser
import os
import sys

from tempotrons import MultiSpikeTempotron, SGD
from tempotrons.parameters import TEMPOTRON_PARAMS, INPUT_PARAMS
from tempotrons.plots import plot_rcparams, plot_spikes_input, plot_potential, get_progress_annotations
from tempotrons.utils import poisson_spikes_input, get_mean_square_error

"""
A multi-spike tempotron learns to emit a given number of output spikes for
each of a few frozen Poisson inputs.
To run this experiment with a config, use
python multi_spike_counting.py /path/to/config.cfg
An example config file is given in configs/multi_spike.cfg
"""

if len(sys.argv) > 1:
	cfg_file = sys.argv[1]
	config = configparser.ConfigParser()
	config.read(cfg_file)
	method = str(config["Tempotron"]["Method"])
	learning_rate = float(config["Tempotron"]["LearningRate"])
	momentum = float(config["Tempotron"]["Momentum"])
	STEPS = int(config["Tempotron"]["Steps"])
	N_SAMPLES = int(config["Tempotron"]["Samples"])
	RATE = float(config["Tempotron"]["Rate"])
else:
	print("Using default arguments")
	method = "gradient"
	learning_rate = 1e-3
	momentum = 0.9
	STEPS = 5000
	N_SAMPLES = 5
	RATE = 10.0

N = INPUT_PARAMS["N"]
T = INPUT_PARAMS["T"]
DT = 1.0  # ms
IMG_DIR = "imgs"
t = np.arange(0, T + DT, DT)

rng = np.random.default_rng()
tmp = MultiSpikeTempotron(N, rng=rng, **TEMPOTRON_PARAMS)
opt = SGD(learning_rate, momentum=momentum)

samples = [(poisson_spikes_input(N, RATE, T, rng=rng), k) for k in range(N_SAMPLES)]
out_b = [tmp(x, t=t) for x, _ in samples]

for step in range(STEPS):
	x, y = samples[rng.integers(len(samples))]
	tmp.train(x, y, optimizer=opt, method=method)
	if step % 500 == 0:
		counts = [tmp.count(x) for x, _ in samples]
		err = get_mean_square_error(counts, [y for _, y in samples])
		print("Step: " + str(step) + " error: " + str(err))

out_a = [tmp(x, t=t) for x, _ in samples]

rcParams.update(plot_rcparams)
fig, axes = plt.subplots(N_SAMPLES, 2, figsize=(12, 2 * N_SAMPLES), sharex=True)
for k, ((x, y), ob, oa) in enumerate(zip(samples, out_b, out_a)):
	plot_spikes_input(x, ax=axes[k, 0])
	plot_potential(tmp, t, ob.V, ax=axes[k, 1], color="gray", linestyle="--")
	plot_potential(tmp, t, oa.V, ax=axes[k, 1], spikes=oa.spikes)
	txt, clr = get_progress_annotations(len(oa.spikes), N_b=len(ob.spikes), N_t=y)
	axes[k, 1].set_title(txt, color=clr, loc="left")
fig.tight_layout()

os.makedirs(IMG_DIR, exist_ok=True)
save_filename = os.path.join(IMG_DIR, "multi_spike_" + method + ".png")
plt.savefig(save_filename)
plt.close()
