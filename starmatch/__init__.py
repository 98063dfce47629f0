"""
Star Match - Arithmetic puzzle engine

A single-player puzzle: a number of stars (1-9) is shown and the player
picks numbers from a 1-9 pool whose sum matches the stars before the
countdown runs out. The engine provides:
- State management
- Win/loss evaluation
- Solvable round generation
- A cancellable countdown clock
"""

__version__ = "0.1.0"
