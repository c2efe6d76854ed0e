"""Front-ends that drive the managers (console REPL)."""
