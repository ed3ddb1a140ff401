import os
import sys

# headless pygame for every test module
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
