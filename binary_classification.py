import numpy as np
import matplotlib.pyplot as plt
from matplotlib import rcParams
import configparser
import os
import sys

from tempotrons import Tempotron, SGD
from tempotrons.parameters import TEMPOTRON_PARAMS, SGD_PARAMS, INPUT_PARAMS
from tempotrons.plots import plot_rcparams, plot_spikes_input, plot_potential, get_progress_annotations
from tempotrons.utils import poisson_spikes_input, spikes_jitter, get_mean_square_error

"""
A binary tempotron learns to fire for jittered versions of one Poisson input
pattern and to stay silent for jittered versions of another.
To run this experiment with a config, use
python binary_classification.py /path/to/config.cfg
An example config file is given in configs/binary.cfg
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
	learning_rate = SGD_PARAMS["lr"]
	momentum = SGD_PARAMS["momentum"]
	STEPS = 20000
	N_SAMPLES = 10
	RATE = INPUT_PARAMS["rate"]

N = INPUT_PARAMS["N"]
T = INPUT_PARAMS["T"]
DT = 1.0  # ms
IMG_DIR = "imgs"
t = np.arange(0, T + DT, DT)

rng = np.random.default_rng()
tmp = Tempotron(N, rng=rng, **TEMPOTRON_PARAMS)
opt = SGD(learning_rate, momentum=momentum)

"""
Two base patterns; the first half of the samples are jittered copies of the
first pattern (target False), the second half of the second (target True).
"""
base_samples = [poisson_spikes_input(N, RATE, T, rng=rng) for _ in range(2)]
samples = []
for j in range(N_SAMPLES):
	label = (2 * j) // N_SAMPLES
	x = spikes_jitter(base_samples[label], sigma=INPUT_PARAMS["jitter"], rng=rng)
	samples.append((x, bool(label)))

out_b = [tmp(x, t=t) for x, _ in samples]

for step in range(STEPS):
	x, y = samples[rng.integers(len(samples))]
	tmp.train(x, y, optimizer=opt, method=method)
	if step % 1000 == 0:
		decisions = [tmp.classify(x) for x, _ in samples]
		err = get_mean_square_error(decisions, [y for _, y in samples])
		print("Step: " + str(step) + " error: " + str(err))

out_a = [tmp(x, t=t) for x, _ in samples]

"""
Plot the inputs and the voltage traces before (dashed) and after training.
"""
rcParams.update(plot_rcparams)
colors = ["royalblue", "magenta"]
fig, axes = plt.subplots(N_SAMPLES, 2, figsize=(12, 2 * N_SAMPLES), sharex=True)
for k, ((x, y), ob, oa) in enumerate(zip(samples, out_b, out_a)):
	plot_spikes_input(x, ax=axes[k, 0], color=colors[int(y)])
	plot_potential(tmp, t, ob.V, ax=axes[k, 1], color=colors[int(y)], linestyle="--")
	plot_potential(tmp, t, oa.V, ax=axes[k, 1], color=colors[int(y)], spikes=oa.spikes)
	txt, clr = get_progress_annotations(len(oa.spikes) > 0, N_b=len(ob.spikes) > 0, N_t=y)
	axes[k, 1].set_title(txt, color=clr, loc="left")
fig.tight_layout()

os.makedirs(IMG_DIR, exist_ok=True)
save_filename = os.path.join(IMG_DIR, "binary_" + method + ".png")
plt.savefig(save_filename)
plt.close()
