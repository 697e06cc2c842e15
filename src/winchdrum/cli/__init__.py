"""Command-line entry points: winchdrum-calc and winchdrum-serve."""
