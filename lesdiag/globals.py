# -- lesdiag/globals.py

import os

on_cluster = os.getenv("MY_MACHINE", "") == "cluster"

# no interactive windows on the cluster or without a display
headless = on_cluster or (os.name == "posix" and not os.getenv("DISPLAY"))

DEFAULT_ALPHA: float = 2e-4
DEFAULT_G: float = 9.81
