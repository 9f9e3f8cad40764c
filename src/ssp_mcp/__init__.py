"""SSP MCP - self-service provisioning of OpenShift projects."""

__version__ = "0.1.0"
