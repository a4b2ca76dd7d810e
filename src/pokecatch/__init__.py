"""PokeCatch: authenticated backend for a catch-Pokemon game.

Users register and log in, look up Pokemon metadata from PokeAPI,
and keep a personal collection of the Pokemon they have caught.
"""

__version__ = "0.1.0"
