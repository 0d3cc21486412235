"""Type trees, configuration, lint catalogue and the scan engine."""
