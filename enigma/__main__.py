"""
Enigma Module Entry Point
==========================

Allows running the Enigma CLI via: python -m enigma
"""

from enigma.cli import main

if __name__ == "__main__":
    main()
