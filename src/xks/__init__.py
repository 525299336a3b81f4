"""xks -- manage Azure Kubernetes Service clusters from the CLI."""

__version__ = "1.2026.10.1"
