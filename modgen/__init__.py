"""modgen -- scaffolding for Ignition plugin-host module projects."""

__version__ = "0.1.0"
