"""Entry point for the cache simulator.

Usage:
    python run.py -s 4 -E 1 -b 4 -t trace.txt
    python run.py -s 0 -E 1 -b 0 -t trace.txt -v   # per-access outcomes
"""
import sys
from csim.simulation.cli import main


if __name__ == '__main__':
    sys.exit(main())
