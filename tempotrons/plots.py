"""
Plotting helpers for spikes inputs and tempotron voltage traces.
They only draw into matplotlib axes; saving and layout are left to the caller.
"""
import matplotlib.pyplot as plt
import numpy as np

plot_rcparams = {"font.size": 10,
                 "axes.titlesize": 10,
                 "axes.labelsize": 10,
                 "axes.spines.top": False,
                 "axes.spines.right": False}


def _axes(ax):
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 3))
    return ax


def plot_spikes_input(inp, ax=None, color="black", s=5):
    """
    Raster plot of an input, one row per channel
    """
    ax = _axes(ax)
    for i, x in enumerate(inp):
        ax.scatter(x, [i] * len(x), c=color, s=s, marker="|")
    ax.set_xlim(inp.duration.start, inp.duration.end)
    ax.set_ylim(-1, len(inp))
    ax.set_xlabel("Time [ms]")
    ax.set_ylabel("Input")
    return ax


def plot_potential(model, t, V, ax=None, color="royalblue", linestyle="-", spikes=None):
    """
    Voltage trace with the threshold and resting potential
    :param model: the simulated Tempotron
    :param t: sample times (ms)
    :param V: voltage at `t`
    :param spikes: output spike times to mark
    """
    ax = _axes(ax)
    ax.plot(t, V, color=color, linestyle=linestyle)
    ax.axhline(y=model.theta, color="gray", linestyle="--", linewidth=0.8)
    ax.axhline(y=model.V_rest, color="gray", linestyle=":", linewidth=0.8)
    if spikes is not None and len(spikes) > 0:
        ax.scatter(spikes, [model.theta] * len(spikes), color=color, marker="v", zorder=3)
    ax.set_xlim(np.min(t), np.max(t))
    ax.set_xlabel("Time [ms]")
    ax.set_ylabel("V")
    return ax


def get_progress_annotations(N_a, N_b=None, N_t=None):
    """
    Text and colour describing a training outcome
    :param N_a: output after training (spike count, or True/False for a binary tempotron)
    :param N_b: output before training
    :param N_t: target
    :return: (text, colour); green if the target is met, red if not, black without a target
    """
    txt = str(int(N_a))
    if N_b is not None:
        txt = str(int(N_b)) + " → " + txt
    if N_t is None:
        return txt, "black"
    txt += " (target: " + str(int(N_t)) + ")"
    return txt, "green" if int(N_a) == int(N_t) else "red"
