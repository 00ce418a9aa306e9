import os

# Headless runs (CI) have no display for the GUI tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
