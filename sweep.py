"""Run the queensweep command line from a source checkout: ``python sweep.py``."""

from queensweep.analysis.cli import main


if __name__ == "__main__":
    main()
