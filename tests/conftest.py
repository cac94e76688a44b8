"""Test environment setup: give Rich a wide terminal so long messages are not wrapped."""

import os

os.environ["COLUMNS"] = "200"
