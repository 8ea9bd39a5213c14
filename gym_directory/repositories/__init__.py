"""Store implementations.

``interfaces`` defines the contract; ``sqlalchemy`` and ``memory`` implement it.
The active one is chosen once at startup (see ``gym_directory.core.startup``).
"""
