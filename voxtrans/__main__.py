"""
Entry point for running VoxTrans as a module.

Usage:
    python -m voxtrans --help
    python -m voxtrans translate "bom dia" --source pt-BR --target en-US
    python -m voxtrans languages
"""
from .cli import app


if __name__ == "__main__":
    app()
