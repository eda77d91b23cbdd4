"""World Monitor desktop shell: hosts the local API sidecar next to the UI."""

__version__ = "0.1.0"
