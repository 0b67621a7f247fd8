# src/i2f/__main__.py
import sys

# main() runs the one-time env setup for both "python -m i2f" and the i2f script
from i2f.app import main

if __name__ == "__main__":
    sys.exit(main())
