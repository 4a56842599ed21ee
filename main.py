"""Interpolation Pro launcher.

Runs the desktop viewer; the same entry point is installed as the
``interpolation-pro`` console script.
"""

from interpolation_pro.app import main

if __name__ == "__main__":
    main()
