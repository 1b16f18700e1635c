# cli_main.py
import sys
import os

# Add the project root to the Python path so the layer packages resolve
# when the script is run from a checkout.
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from presentation.main import run

if __name__ == "__main__":
    run()
