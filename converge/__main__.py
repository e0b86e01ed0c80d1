"""
Punto de entrada: python -m converge
"""

from converge.cli.app import app

if __name__ == "__main__":
    app()
