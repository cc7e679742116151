#!/usr/bin/env python3
"""
NEON SWARM Launcher
====================
Run this script to start the game.
"""

from neon_swarm.main import main

if __name__ == "__main__":
    main()
