#!/usr/bin/env python3
"""Interactive release: pick patch/minor/major, then run standard-version.

Runs the installed ``boilerkit`` executable, so it works wherever
``npm run release`` does.
"""

import os
import sys

if __name__ == "__main__":
    os.execvp("boilerkit", ["boilerkit", "release", *sys.argv[1:]])
