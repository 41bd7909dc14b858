"""Maven project synthesis, invocation, and artifact harvesting."""
