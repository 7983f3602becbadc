"""
Default parameters. Times are in ms, rates in Hz.
Parameters: tau_m -> Membrane time constant
            tau_s -> Synaptic time constant (must be smaller than tau_m)
            theta -> Firing threshold
            V_rest -> Resting membrane potential
"""

TEMPOTRON_PARAMS = {"tau_m": 15.0,
                    "tau_s": 3.75,
                    "theta": 1.0,
                    "V_rest": 0.0}

SGD_PARAMS = {"lr": 1e-4,
              "momentum": 0.99}

RMSPROP_PARAMS = {"lr": 1e-3,
                  "rho": 0.9,
                  "eps": 1e-8}

ADAM_PARAMS = {"lr": 1e-3,
               "beta1": 0.9,
               "beta2": 0.999,
               "eps": 1e-8}

INPUT_PARAMS = {"N": 10,
                "T": 500.0,
                "rate": 3.0,
                "jitter": 5.0,
                "max_attempts": 100}
