"""FHEVM example hub.

Scaffolds standalone Hardhat example projects from a static registry,
builds GitBook-style documentation from annotated test files, and verifies
that generated projects are complete.
"""

__version__ = "0.1.0"
