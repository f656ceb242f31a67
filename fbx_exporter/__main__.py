"""
Main entry point for the fbx_exporter package.

Allows running the client as: python -m fbx_exporter
"""

from fbx_exporter.cli import main

if __name__ == "__main__":
    main()
