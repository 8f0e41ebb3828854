"""Flask UI for the pairjump engine (python -m pairjump_web --file ...)."""
